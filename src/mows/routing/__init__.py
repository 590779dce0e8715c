"""Routing: route table, route groups, and path matching.

Static paths are looked up directly; ``:name`` and trailing ``*name``
patterns are matched by a linear scan in registration order.
"""

from mows.routing.group import RouterGroup
from mows.routing.route import ParamRoute, Route, RouteMatch
from mows.routing.router import Router

__all__ = ["ParamRoute", "Route", "RouteMatch", "Router", "RouterGroup"]
