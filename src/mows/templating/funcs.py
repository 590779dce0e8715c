"""Default template helper functions.

Registered on every mows template set as both globals and filters, so
either call style works::

    {{ safe_html(banner) }}        {{ banner | safe_html }}
    {{ date(now(), "%Y-%m-%d") }}  {{ post.created | date("%d %b") }}
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from kida.template import Markup


def safe_html(value: Any) -> Markup:
    """Mark a string as safe HTML so autoescaping leaves it alone."""
    return Markup(str(value))


def now() -> datetime:
    """Return the current local time."""
    return datetime.now()


def date(value: datetime, fmt: str) -> str:
    """Format a datetime with ``strftime`` codes.

    Example:
        {{ date(now(), "%Y") }}  → "2026"
    """
    return value.strftime(fmt)


def default_funcs() -> dict[str, Callable[..., Any]]:
    """Return a fresh copy of the default helper map."""
    return {
        "safe_html": safe_html,
        "now": now,
        "date": date,
    }
