"""Tests for mows.binding — populating dataclasses from decoded JSON."""

from dataclasses import dataclass, field

import pytest

from mows.binding import bind, is_bindable
from mows.errors import BindingError


@dataclass
class Address:
    city: str
    zip: str = ""


@dataclass
class User:
    name: str
    age: int
    score: float = 0.0
    admin: bool = False
    tags: list[str] = field(default_factory=list)
    nickname: str | None = None
    address: Address | None = None
    extra: dict = field(default_factory=dict)


class TestIsBindable:
    def test_dataclass_type(self) -> None:
        assert is_bindable(User)

    def test_instance_and_plain_types(self) -> None:
        assert not is_bindable(User(name="a", age=1))
        assert not is_bindable(dict)
        assert not is_bindable(None)


class TestBind:
    def test_full_object(self) -> None:
        user = bind(User, {
            "name": "mows",
            "age": 3,
            "score": 9.5,
            "admin": True,
            "tags": ["web", "python"],
            "nickname": "m",
            "address": {"city": "Lagos"},
            "extra": {"k": "v"},
        })
        assert user == User(
            name="mows",
            age=3,
            score=9.5,
            admin=True,
            tags=["web", "python"],
            nickname="m",
            address=Address(city="Lagos"),
            extra={"k": "v"},
        )

    def test_missing_fields_use_zero_values(self) -> None:
        user = bind(User, {})
        assert user.name == ""
        assert user.age == 0
        assert user.tags == []
        assert user.nickname is None

    def test_unknown_keys_ignored(self) -> None:
        user = bind(User, {"name": "a", "age": 1, "unknown": True})
        assert user.name == "a"

    def test_int_accepts_integral_float(self) -> None:
        assert bind(User, {"name": "a", "age": 4.0}).age == 4

    def test_float_accepts_int(self) -> None:
        score = bind(User, {"name": "a", "age": 1, "score": 7}).score
        assert score == 7.0
        assert isinstance(score, float)

    def test_optional_accepts_null(self) -> None:
        assert bind(User, {"name": "a", "age": 1, "nickname": None}).nickname is None


class TestBindErrors:
    def test_wrong_scalar_type(self) -> None:
        with pytest.raises(BindingError, match="field 'age': expected integer, got string"):
            bind(User, {"name": "a", "age": "three"})

    def test_bool_is_not_an_integer(self) -> None:
        with pytest.raises(BindingError, match="expected integer, got boolean"):
            bind(User, {"name": "a", "age": True})

    def test_fractional_float_is_not_an_integer(self) -> None:
        with pytest.raises(BindingError, match="expected integer, got number"):
            bind(User, {"name": "a", "age": 1.5})

    def test_list_item_type(self) -> None:
        with pytest.raises(BindingError, match=r"field 'tags\[1\]': expected string, got number"):
            bind(User, {"name": "a", "age": 1, "tags": ["ok", 2]})

    def test_nested_error_names_field(self) -> None:
        with pytest.raises(BindingError, match="field 'address'"):
            bind(User, {"name": "a", "age": 1, "address": {"city": 5}})

    def test_non_object_payload(self) -> None:
        with pytest.raises(BindingError, match="cannot bind JSON array into User"):
            bind(User, [1, 2])
