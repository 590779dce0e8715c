"""Built-in validation rules.

Each rule is a callable with the signature::

    def rule(value: Any) -> str | None:
        '''Return an error message, or None if valid.'''

Parameterized rules are factory functions that return a rule::

    def max_length(n: int) -> Rule:
        def check(value: Any) -> str | None:
            if len(value) > n:
                return f"Must be at most {n} characters"
            return None
        return check

Rules work on strings from forms and query strings as well as on the typed
values of a bound dataclass. Apart from ``required``, rules skip ``None``
so optional fields only have to satisfy them when set.
"""

import re
from collections.abc import Callable, Sized
from typing import Any

# Type alias for a rule function
type Rule = Callable[[Any], str | None]


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any) -> str | None:
    """Field must be present and not a zero value (``""``, ``0``, empty list...)."""
    if value is None:
        return "This field is required"
    if isinstance(value, str):
        if not value.strip():
            return "This field is required"
        return None
    if isinstance(value, bool):
        return None if value else "This field is required"
    if isinstance(value, (int, float)):
        return None if value != 0 else "This field is required"
    if isinstance(value, Sized) and len(value) == 0:
        return "This field is required"
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Rule:
    """String (or collection) must be at most *n* long."""

    def check(value: Any) -> str | None:
        if value is not None and len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Rule:
    """String (or collection) must be at least *n* long."""

    def check(value: Any) -> str | None:
        if value is not None and len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------


def minimum(n: float) -> Rule:
    """Number must be greater than or equal to *n*."""

    def check(value: Any) -> str | None:
        if value is not None and value < n:
            return f"Must be at least {n}"
        return None

    return check


def maximum(n: float) -> Rule:
    """Number must be less than or equal to *n*."""

    def check(value: Any) -> str | None:
        if value is not None and value > n:
            return f"Must be at most {n}"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern: checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: Any) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if value is None:
        return None
    if not _EMAIL_RE.match(str(value)):
        return "Must be a valid email address"
    return None


# Basic URL pattern: checks scheme + host structure
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


def url(value: Any) -> str | None:
    """Value must be a valid URL (http/https)."""
    if value is None:
        return None
    if not _URL_RE.match(str(value)):
        return "Must be a valid URL"
    return None


def matches(pattern: str, message: str | None = None) -> Rule:
    """Value must match the given regex pattern."""
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if value is not None and not compiled.match(str(value)):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: Any) -> Rule:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        if value is not None and value not in allowed:
            options = ", ".join(sorted(str(c) for c in allowed))
            return f"Must be one of: {options}"
        return None

    return check


# ---------------------------------------------------------------------------
# Type coercion
# ---------------------------------------------------------------------------


def integer(value: Any) -> str | None:
    """Value must be a valid integer."""
    if value is None or (isinstance(value, int) and not isinstance(value, bool)):
        return None
    try:
        int(value)
    except (ValueError, TypeError):
        return "Must be a whole number"
    return None


def number(value: Any) -> str | None:
    """Value must be a valid number (int or float)."""
    if value is None:
        return None
    try:
        float(value)
    except (ValueError, TypeError):
        return "Must be a number"
    return None
