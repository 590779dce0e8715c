"""User API — JSON CRUD with groups, binding, and validation.

Demonstrates global middleware (Logger, Recover), a centralized error
handler, an ``/api`` route group, path parameters, and
``bind_json_and_validate`` on a dataclass with field rules.

Run:
    cd examples/user_api && python app.py
"""

import logging
import threading
from dataclasses import asdict, dataclass, field

from mows import Engine, Logger, MowsError, Recover
from mows.validation import email, min_length, required, rules

engine = Engine()

engine.use(Logger(), Recover())


@engine.set_error_handler
async def on_error(ctx, exc):
    await ctx.json(400, {"error": str(exc)})


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass
class User:
    id: str = ""
    name: str = field(default="", metadata=rules(required, min_length(3)))
    email: str = field(default="", metadata=rules(required, email))


_users: dict[str, User] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> str:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return str(n)


def _lookup(user_id: str) -> User:
    user = _users.get(user_id)
    if user is None:
        raise MowsError("user not found")
    return user


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@engine.get("/")
async def index(ctx):
    await ctx.json(200, {"message": "Welcome to MOWS API"})


api = engine.group("/api")


@api.post("/users")
async def create_user(ctx):
    user = await ctx.bind_json_and_validate(User)
    user.id = _get_next_id()
    _users[user.id] = user
    await ctx.json(201, asdict(user))


@api.get("/users")
async def list_users(ctx):
    await ctx.json(200, [asdict(u) for u in _users.values()])


@api.get("/users/:id")
async def show_user(ctx):
    await ctx.json(200, asdict(_lookup(ctx.param("id"))))


@api.put("/users/:id")
async def update_user(ctx):
    user = _lookup(ctx.param("id"))
    update = await ctx.bind_json_and_validate(User)
    user.name = update.name
    user.email = update.email
    await ctx.json(200, asdict(user))


@api.delete("/users/:id")
async def delete_user(ctx):
    user = _lookup(ctx.param("id"))
    del _users[user.id]
    await ctx.no_content()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    engine.run(":8080")
