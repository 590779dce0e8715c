"""mows — a minimal web framework.

Static and parameterized routing, middleware chains, route groups, and a
per-request Context with JSON, text, and template responses.

Basic usage::

    from mows import Engine, Logger, Recover

    engine = Engine()
    engine.use(Recover(), Logger())

    @engine.get("/users/:id")
    async def show_user(ctx):
        await ctx.json(200, {"id": ctx.param("id")})

    engine.run(":8080")

Serving needs pounce (``pip install mows[server]``); any other ASGI server
can host an ``Engine`` directly.
"""

__version__ = "0.1.0"
__all__ = [
    "BindingError",
    "ConfigurationError",
    "Context",
    "Engine",
    "EngineConfig",
    "Logger",
    "Middleware",
    "MowsError",
    "Next",
    "Recover",
    "RouterGroup",
    "TemplateError",
    "ValidationError",
]

_ERRORS = ("BindingError", "ConfigurationError", "MowsError", "TemplateError", "ValidationError")


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import mows`` fast while providing a clean top-level API.
    """
    if name == "Engine":
        from mows.app import Engine

        return Engine

    if name == "EngineConfig":
        from mows.config import EngineConfig

        return EngineConfig

    if name == "Context":
        from mows.context import Context

        return Context

    if name == "RouterGroup":
        from mows.routing.group import RouterGroup

        return RouterGroup

    if name in ("Logger", "Recover", "Middleware"):
        import mows.middleware as middleware

        return getattr(middleware, name)

    if name == "Next":
        from mows._internal.types import Next

        return Next

    if name in _ERRORS:
        import mows.errors as errors

        return getattr(errors, name)

    msg = f"module 'mows' has no attribute {name!r}"
    raise AttributeError(msg)
