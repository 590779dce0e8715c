"""Tests for the lazy top-level API in mows/__init__."""

import pytest

import mows


class TestLazyImports:
    def test_public_names_resolve(self) -> None:
        for name in mows.__all__:
            assert getattr(mows, name) is not None

    def test_engine_is_the_app_class(self) -> None:
        from mows.app import Engine

        assert mows.Engine is Engine

    def test_middleware_exports(self) -> None:
        from mows.middleware import Logger, Recover

        assert mows.Logger is Logger
        assert mows.Recover is Recover

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError):
            mows.does_not_exist  # noqa: B018

    def test_version(self) -> None:
        assert isinstance(mows.__version__, str)
