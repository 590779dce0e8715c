"""Fixtures for the runnable mows example apps.

Every example directory holds an ``app.py`` that builds a module-level
``engine`` at import time, plus a test module next to it. The fixtures
here execute that ``app.py`` from scratch for each test, so in-memory
stores and id counters in the example start empty, and hand the test
either the ``Engine`` itself or a ``TestClient`` already driving it
through lifespan startup.
"""

import importlib.util
from pathlib import Path

import pytest

from mows.app import Engine
from mows.testing import TestClient


def load_example(app_path: Path) -> Engine:
    """Execute *app_path* as a throwaway module and return its ``engine``."""
    spec = importlib.util.spec_from_file_location(f"mows_example_{app_path.parent.name}", app_path)
    if spec is None or spec.loader is None:
        pytest.fail(f"cannot import example {app_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    engine = getattr(module, "engine", None)
    if not isinstance(engine, Engine):
        pytest.fail(f"{app_path} does not define a module-level mows Engine named 'engine'")
    return engine


@pytest.fixture
def example_engine(request: pytest.FixtureRequest) -> Engine:
    """A freshly built Engine from the app.py beside the requesting test."""
    return load_example(Path(request.path).parent / "app.py")


@pytest.fixture
async def example_client(example_engine: Engine):
    """A started ``TestClient`` for ``example_engine``; shut down after the test."""
    async with TestClient(example_engine) as client:
        yield client
