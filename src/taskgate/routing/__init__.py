"""Route protection for page-level views."""

from taskgate.routing.guard import (
    Redirect,
    RouteGuard,
    default_fallback,
    guard,
    protected_route,
)
from taskgate.routing.routes import (
    DEFAULT_ROUTES,
    GuardOutcome,
    RouteDefinition,
    RouteTable,
)


__all__ = [
    "DEFAULT_ROUTES",
    "GuardOutcome",
    "Redirect",
    "RouteDefinition",
    "RouteGuard",
    "RouteTable",
    "default_fallback",
    "guard",
    "protected_route",
]
