"""Static files and templates.

Serves ``./public`` under ``/static`` and renders ``views/home.html``.
Dev mode reloads templates from disk before every render, so edits show
up without a restart.

Run:
    cd examples/static_and_template && python app.py
"""

import logging
from pathlib import Path

from mows import Engine, EngineConfig

HERE = Path(__file__).parent

engine = Engine(EngineConfig(dev_mode=True))

engine.static("/static", HERE / "public")
engine.load_templates(str(HERE / "views" / "*.html"))


@engine.get("/")
async def home(ctx):
    await ctx.html(200, "home.html", {"title": "Mows", "name": "User"})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    engine.run(":8080")
