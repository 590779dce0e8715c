"""Route, ParamRoute, and RouteMatch frozen dataclasses."""

from dataclasses import dataclass
from typing import Any

from mows._internal.types import Handler


@dataclass(frozen=True, slots=True)
class Route:
    """A handler bound to a (method, path) pair, with its own middleware.

    ``middleware`` is the snapshot taken at registration: the group's list
    followed by the route's "before" handlers and extra middleware.
    """

    handler: Handler
    middleware: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class ParamRoute:
    """A route whose path has capture segments.

    ``parts`` is the registered path trimmed of surrounding slashes and split
    on ``/``. ``:name`` parts capture one segment; a trailing ``*name`` part
    captures the rest of the path.
    """

    path: str
    parts: tuple[str, ...]
    route: Route

    @property
    def catch_all(self) -> bool:
        return bool(self.parts) and self.parts[-1].startswith("*")


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    params: dict[str, str]
