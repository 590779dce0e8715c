"""Validation result: immutable container for validated data or errors."""

from dataclasses import dataclass
from typing import Any

from mows.errors import ValidationError


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a mapping against a set of rules.

    The result is falsy when invalid, so you can write::

        result = validate(ctx.request.query, rules)
        if not result:
            await ctx.json(422, {"errors": result.errors})
            return
    """

    data: dict[str, Any]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid: enables the ``if not result:`` pattern."""
        return self.is_valid

    def raise_for_errors(self) -> None:
        """Raise ``ValidationError`` if any rule failed."""
        if self.errors:
            raise ValidationError(self.errors)
