"""Page route table.

Maps frontend page paths (``/roles/:id/edit`` style) to the requirement
guarding each page, so clients can ask before navigating.
"""

from collections.abc import Iterable, Iterator, Sequence

import structlog
from pydantic import BaseModel, ConfigDict

from taskgate.config import settings
from taskgate.core.errors import NotFoundError
from taskgate.core.permissions.catalog import DEFAULT_CATALOG, PermissionCatalog
from taskgate.core.permissions.checker import PermissionChecker
from taskgate.core.permissions.requirements import AccessRequirement


logger = structlog.get_logger()


class RouteDefinition(BaseModel):
    """A page path and the requirement guarding it."""

    model_config = ConfigDict(frozen=True)

    path: str
    requirement: AccessRequirement = AccessRequirement.none()
    title: str | None = None

    @property
    def segments(self) -> tuple[str, ...]:
        return _split(self.path)

    def matches(self, path: str) -> bool:
        """Match a concrete path; ``:name`` segments match any one segment."""
        pattern = self.segments
        candidate = _split(path)
        if len(pattern) != len(candidate):
            return False
        return all(
            expected.startswith(":") or expected == actual
            for expected, actual in zip(pattern, candidate, strict=True)
        )


class GuardOutcome(BaseModel):
    """The guard's answer for a concrete page path."""

    path: str
    allowed: bool
    redirect_to: str | None = None


class RouteTable:
    """Ordered collection of route definitions; first match wins."""

    def __init__(self, routes: Iterable[RouteDefinition]) -> None:
        self._routes: tuple[RouteDefinition, ...] = tuple(routes)

    def __iter__(self) -> Iterator[RouteDefinition]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, path: str) -> RouteDefinition | None:
        for route in self._routes:
            if route.matches(path):
                return route
        return None

    def resolve(
        self,
        path: str,
        checker: PermissionChecker,
        landing_route: str | None = None,
    ) -> GuardOutcome:
        """Decide whether the principal may open a page.

        Denied pages redirect to ``landing_route``, or to the configured
        landing route when it is None.

        Raises:
            NotFoundError: If no route matches the path
        """
        route = self.match(path)
        if route is None:
            raise NotFoundError("Route not found", resource="route", resource_id=path)

        if checker.evaluate(route.requirement):
            return GuardOutcome(path=path, allowed=True)

        logger.info("route_guard_redirect", path=path, route=route.path)
        return GuardOutcome(
            path=path,
            allowed=False,
            redirect_to=landing_route or settings.landing_route,
        )

    def validate(self, catalog: PermissionCatalog, strict: bool = False) -> None:
        """Check route requirements against a catalog.

        Raises:
            UnknownPermissionError: On the first unknown name, when ``strict``
        """
        for route in self._routes:
            unknown = catalog.unknown(route.requirement.permission_names())
            if not unknown:
                continue
            if strict:
                catalog.validate_requirement(route.requirement, source=route.path)
            logger.warning(
                "route_unknown_permission", route=route.path, permissions=unknown
            )


def _split(path: str) -> tuple[str, ...]:
    return tuple(segment for segment in path.strip("/").split("/") if segment)


def _crud_routes(
    base: str,
    title: str,
    view: str,
    create: str | None = None,
    edit: str | None = None,
) -> Sequence[RouteDefinition]:
    routes = [
        RouteDefinition(
            path=base, title=title, requirement=AccessRequirement.permission(view)
        )
    ]
    if create:
        routes.append(
            RouteDefinition(
                path=f"{base}/create",
                title=f"Create {title}",
                requirement=AccessRequirement.permission(create),
            )
        )
    routes.append(
        RouteDefinition(
            path=f"{base}/:id",
            title=title,
            requirement=AccessRequirement.permission(view),
        )
    )
    if edit:
        routes.append(
            RouteDefinition(
                path=f"{base}/:id/edit",
                title=f"Edit {title}",
                requirement=AccessRequirement.permission(edit),
            )
        )
    return routes


DEFAULT_ROUTES = RouteTable(
    [
        RouteDefinition(path="/dashboard", title="Dashboard"),
        RouteDefinition(path="/profile", title="Profile"),
        RouteDefinition(
            path="/analytics",
            title="Analytics",
            requirement=AccessRequirement.permission("view analytics"),
        ),
        *_crud_routes("/users", "Users", "view users", "create users", "edit users"),
        *_crud_routes("/roles", "Roles", "view roles", "create roles", "edit roles"),
        *_crud_routes(
            "/projects", "Projects", "view projects", "create projects", "edit projects"
        ),
        *_crud_routes("/tasks", "Tasks", "view tasks", "create tasks", "edit tasks"),
        *_crud_routes(
            "/help-requests",
            "Help Requests",
            "view help requests",
            "create help requests",
            "edit help requests",
        ),
        *_crud_routes("/tickets", "Tickets", "view tickets", edit="edit tickets"),
        *_crud_routes(
            "/rating-configs",
            "Rating Configurations",
            "view rating configs",
            "create rating configs",
            "edit rating configs",
        ),
        RouteDefinition(
            path="/ratings",
            title="Ratings",
            requirement=AccessRequirement.permissions(
                ["create task ratings", "create stakeholder ratings"]
            ),
        ),
        RouteDefinition(
            path="/final-ratings",
            title="Final Ratings",
            requirement=AccessRequirement.permissions(
                ["view final ratings", "calculate final ratings"]
            ),
        ),
    ]
)
DEFAULT_ROUTES.validate(DEFAULT_CATALOG, strict=True)
