"""Decoding JSON request bodies into dataclasses.

``bind(cls, data)`` populates a dataclass from a decoded JSON object:

- keys matching field names are copied in after a type check against the
  field annotation (``str``, ``int``, ``float``, ``bool``, ``list``,
  ``dict``, ``X | None``, nested dataclasses; anything else passes through);
- missing keys use the field default, or the zero value of the field type
  when the field has no default, so a later ``required`` rule can report it;
- unknown keys are ignored.

A value of the wrong JSON type raises ``BindingError`` naming the field.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping
from typing import Any

from mows.errors import BindingError

_ZERO: dict[Any, Any] = {str: "", int: 0, float: 0.0, bool: False}


def is_bindable(target: Any) -> bool:
    """Return True if *target* is a dataclass type."""
    return isinstance(target, type) and dataclasses.is_dataclass(target)


def bind[T](cls: type[T], data: Any) -> T:
    """Create a *cls* instance from decoded JSON *data*."""
    if not isinstance(data, Mapping):
        msg = f"cannot bind JSON {_json_type(data)} into {cls.__name__}"
        raise BindingError(msg)

    hints = typing.get_type_hints(cls)
    kwargs: dict[str, Any] = {}

    for f in dataclasses.fields(cls):  # type: ignore[arg-type]
        if not f.init:
            continue
        target_type = hints.get(f.name, Any)
        if f.name in data:
            kwargs[f.name] = _convert(data[f.name], target_type, f.name)
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = _zero_value(target_type)

    return cls(**kwargs)


def _convert(value: Any, target_type: Any, name: str) -> Any:
    """Check *value* against *target_type*; raise ``BindingError`` on mismatch."""
    if target_type is Any:
        return value

    origin = typing.get_origin(target_type)

    # X | None and Optional[X]
    if origin is typing.Union or origin is types.UnionType:
        args = typing.get_args(target_type)
        if value is None and type(None) in args:
            return None
        options = [arg for arg in args if arg is not type(None)]
        if len(options) == 1:
            return _convert(value, options[0], name)
        for arg in options:
            try:
                return _convert(value, arg, name)
            except BindingError:
                continue
        raise _mismatch(name, target_type, value)

    if target_type is str:
        if isinstance(value, str):
            return value
        raise _mismatch(name, "string", value)

    if target_type is bool:
        if isinstance(value, bool):
            return value
        raise _mismatch(name, "boolean", value)

    if target_type is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise _mismatch(name, "integer", value)

    if target_type is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise _mismatch(name, "number", value)

    if target_type is list or origin is list:
        if not isinstance(value, list):
            raise _mismatch(name, "array", value)
        (item_type,) = typing.get_args(target_type) or (Any,)
        return [_convert(item, item_type, f"{name}[{i}]") for i, item in enumerate(value)]

    if target_type is dict or origin is dict:
        if not isinstance(value, dict):
            raise _mismatch(name, "object", value)
        return value

    if is_bindable(target_type):
        try:
            return bind(target_type, value)
        except BindingError as exc:
            raise BindingError(f"field {name!r}: {exc}") from exc

    # Unknown type: return raw value
    return value


def _zero_value(target_type: Any) -> Any:
    if target_type in _ZERO:
        return _ZERO[target_type]
    origin = typing.get_origin(target_type)
    if target_type is list or origin is list:
        return []
    if target_type is dict or origin is dict:
        return {}
    return None


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _mismatch(name: str, expected: Any, value: Any) -> BindingError:
    if not isinstance(expected, str):
        expected = getattr(expected, "__name__", None) or str(expected)
    return BindingError(f"field {name!r}: expected {expected}, got {_json_type(value)}")
