"""Validation: composable rules, clean results.

Validate a mapping (query string, decoded JSON object)::

    from mows.validation import validate, required, max_length, email

    result = validate(ctx.request.query, {
        "q": [required, max_length(200)],
    })
    if not result:
        ...

Or declare rules on a dataclass and let the engine's validator check it::

    @dataclass
    class User:
        name: str = field(default="", metadata=rules(required, min_length(3)))

    user = await ctx.bind_json_and_validate(User)
"""

from collections.abc import Mapping
from typing import Any

from mows.validation.result import ValidationResult
from mows.validation.rules import (
    Rule,
    email,
    integer,
    matches,
    max_length,
    maximum,
    min_length,
    minimum,
    number,
    one_of,
    required,
    url,
)
from mows.validation.struct import Validator, rules

__all__ = [
    "Rule",
    "ValidationResult",
    "Validator",
    "email",
    "integer",
    "matches",
    "max_length",
    "maximum",
    "min_length",
    "minimum",
    "number",
    "one_of",
    "required",
    "rules",
    "url",
    "validate",
]


def validate(
    data: Mapping[str, Any],
    rules: dict[str, list[Rule]],
) -> ValidationResult:
    """Validate a mapping against a set of rules.

    Args:
        data: Any mapping of field names to values: ``QueryParams``,
            a decoded JSON object, or a plain ``dict``.
        rules: A dict mapping field names to lists of rule functions. Each
            rule returns an error message string on failure, or ``None``.

    Returns:
        A ``ValidationResult`` with ``.data`` (values of the fields that
        passed) and ``.errors`` (field -> list of error messages).
    """
    errors: dict[str, list[str]] = {}
    cleaned: dict[str, Any] = {}

    for field_name, validators in rules.items():
        value = data.get(field_name)

        field_errors: list[str] = []
        for validator in validators:
            error = validator(value)
            if error is not None:
                field_errors.append(error)
                # No point running max_length on a missing value
                if validator is required:
                    break

        if field_errors:
            errors[field_name] = field_errors
        else:
            cleaned[field_name] = value

    return ValidationResult(data=cleaned, errors=errors)
