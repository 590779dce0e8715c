"""Route table with static and parameterized path matching.

Static paths live in a two-level ``method -> path -> Route`` dict for O(1)
lookup. Paths with capture segments are kept per method in registration
order and matched by a linear scan, so when two patterns overlap the one
registered first wins. Static routes are always tried first.
"""

from mows._internal.types import Handler
from mows.errors import ConfigurationError
from mows.routing.route import ParamRoute, Route, RouteMatch


def split_path(path: str) -> list[str]:
    """Trim surrounding slashes and split on ``/``.

    Empty segments are kept, so ``"/"`` splits to ``[""]`` and
    ``"/a//b"`` to ``["a", "", "b"]``.
    """
    return path.strip("/").split("/")


def is_capture(part: str) -> bool:
    """True for ``:name`` and ``*name`` segments."""
    return part.startswith((":", "*"))


def has_params(path: str) -> bool:
    """True if any segment of *path* is a capture segment."""
    return any(is_capture(part) for part in path.split("/"))


def parse_param_path(path: str) -> tuple[str, ...]:
    """Split a parameterized path, rejecting a catch-all that is not last.

    Examples::

        "/users/:id"          -> ("users", ":id")
        "/files/*filepath"    -> ("files", "*filepath")
        "/files/*path/meta"   -> ConfigurationError
    """
    parts = tuple(split_path(path))
    for i, part in enumerate(parts):
        if part.startswith("*") and i != len(parts) - 1:
            msg = f"Catch-all segment {part!r} must be the last segment in {path!r}."
            raise ConfigurationError(msg)
    return parts


class Router:
    """Route table.

    Usage::

        router = Router()
        router.add("GET", "/users", list_users)
        router.add("GET", "/users/:id", show_user)
        match = router.find("GET", "/users/42")
        match.params  # {"id": "42"}
    """

    __slots__ = ("_dynamic", "_order", "_static")

    def __init__(self) -> None:
        self._static: dict[str, dict[str, Route]] = {}
        self._dynamic: dict[str, list[ParamRoute]] = {}
        self._order: list[tuple[str, str, Route]] = []

    def add(
        self,
        method: str,
        path: str,
        handler: Handler,
        middleware: tuple | list = (),
    ) -> Route:
        """Register *handler* for (*method*, *path*).

        Re-registering a static (method, path) replaces the earlier route.
        Parameterized paths are appended; nothing is de-duplicated.
        """
        method = method.upper()
        route = Route(handler=handler, middleware=tuple(middleware))
        if has_params(path):
            parts = parse_param_path(path)
            self._dynamic.setdefault(method, []).append(ParamRoute(path, parts, route))
        else:
            self._static.setdefault(method, {})[path] = route
        self._order.append((method, path, route))
        return route

    @property
    def routes(self) -> list[tuple[str, str, Route]]:
        """Every registration as ``(method, path, route)``, in order."""
        return list(self._order)

    def find(self, method: str, path: str) -> RouteMatch | None:
        """Match a request method and path.

        Returns ``None`` when nothing matches; the dispatcher turns that
        into a not-found response.
        """
        route = self._static.get(method, {}).get(path)
        if route is not None:
            return RouteMatch(route=route, params={})

        request_parts = split_path(path)
        for candidate in self._dynamic.get(method, ()):
            params = _match_parts(candidate, request_parts)
            if params is not None:
                return RouteMatch(route=candidate.route, params=params)

        return None


def _match_parts(candidate: ParamRoute, request_parts: list[str]) -> dict[str, str] | None:
    """Walk the candidate's segments against the request's, pairwise."""
    parts = candidate.parts
    if candidate.catch_all:
        if len(request_parts) < len(parts) - 1:
            return None
    elif len(parts) != len(request_parts):
        return None

    params: dict[str, str] = {}
    for i, part in enumerate(parts):
        if part.startswith("*"):
            params[part[1:]] = "/".join(request_parts[i:])
            break
        if part.startswith(":"):
            params[part[1:]] = request_parts[i]
            continue
        if part != request_parts[i]:
            return None
    return params
