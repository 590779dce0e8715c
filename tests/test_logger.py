"""Tests for mows.middleware.logger — access log lines."""

import logging
import re

import pytest

from mows.app import Engine
from mows.errors import MowsError
from mows.middleware import Logger
from mows.middleware.logger import format_latency
from mows.testing import TestClient

LINE = re.compile(
    r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] (\d{3}) \| \S+ \| (\w+) (\S+) \| (\S*)$"
)


class TestFormatLatency:
    def test_units(self) -> None:
        assert format_latency(0.000_250) == "250µs"
        assert format_latency(0.0125) == "12.500ms"
        assert format_latency(2.5) == "2.500s"


class TestLogger:
    async def test_logs_successful_request(self, caplog: pytest.LogCaptureFixture) -> None:
        engine = Engine()
        engine.use(Logger())
        engine.post("/users", lambda ctx: ctx.text(201, "created"))

        async with TestClient(engine, client=("10.0.0.1", 4242)) as client:
            with caplog.at_level(logging.INFO, logger="mows.access"):
                await client.post("/users")

        records = [r for r in caplog.records if r.name == "mows.access"]
        assert len(records) == 1
        match = LINE.match(records[0].getMessage())
        assert match is not None
        assert match.groups() == ("201", "POST", "/users", "10.0.0.1:4242")

    async def test_error_is_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        engine = Engine()
        engine.use(Logger())

        @engine.get("/fail")
        async def fail(ctx):
            raise MowsError("nope")

        async with TestClient(engine) as client:
            with caplog.at_level(logging.INFO, logger="mows.access"):
                response = await client.get("/fail")

        assert response.status == 400
        assert not [r for r in caplog.records if r.name == "mows.access"]

    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        custom = logging.getLogger("myapp.requests")
        engine = Engine()
        engine.use(Logger(custom))
        engine.get("/", lambda ctx: ctx.text(200, "ok"))

        async with TestClient(engine) as client:
            with caplog.at_level(logging.INFO, logger="myapp.requests"):
                await client.get("/")

        assert len([r for r in caplog.records if r.name == "myapp.requests"]) == 1
        assert not [r for r in caplog.records if r.name == "mows.access"]
