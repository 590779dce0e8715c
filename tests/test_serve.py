"""Tests for mows.server.serve — address parsing and the pounce bridge."""

import sys

import pytest

from mows.app import Engine
from mows.errors import ConfigurationError
from mows.server.serve import parse_address, run_server


class TestParseAddress:
    def test_all_interfaces(self) -> None:
        assert parse_address(":8080") == ("0.0.0.0", 8080)

    def test_host_and_port(self) -> None:
        assert parse_address("localhost:3000") == ("localhost", 3000)

    def test_ipv6(self) -> None:
        assert parse_address("[::1]:8443") == ("::1", 8443)

    def test_port_only_uses_default_host(self) -> None:
        assert parse_address("9000") == ("127.0.0.1", 9000)
        assert parse_address("9000", default_host="10.0.0.5") == ("10.0.0.5", 9000)

    def test_bad_port(self) -> None:
        with pytest.raises(ConfigurationError, match="port must be an integer"):
            parse_address("localhost:http")

    def test_port_out_of_range(self) -> None:
        with pytest.raises(ConfigurationError, match="out of range"):
            parse_address(":70000")


class TestRunServer:
    def test_missing_pounce(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "pounce.config", None)
        monkeypatch.setitem(sys.modules, "pounce.server", None)
        with pytest.raises(ConfigurationError, match=r"pip install mows\[server\]"):
            run_server(Engine(), "127.0.0.1", 8080)
