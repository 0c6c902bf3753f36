"""Route guard.

The guard sits in front of a protected view. If the current principal
passes the view's requirement the view is rendered; otherwise a
fallback is rendered instead, by default a redirect to the landing
route. Authentication is checked before this point (an unauthenticated
visitor gets a 401 from the session dependency), so a denial here
means "logged in but not allowed", never "logged out".

The check is synchronous and does no I/O.
"""

from collections.abc import Awaitable, Callable, Iterable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

import structlog
from fastapi import Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, ConfigDict

from taskgate.config import settings
from taskgate.core.constants import GUARD_REDIRECT_STATUS
from taskgate.core.errors import UnauthorizedError
from taskgate.core.permissions.checker import PermissionChecker
from taskgate.core.permissions.requirements import AccessRequirement
from taskgate.core.session.store import SessionSnapshot


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")
F = TypeVar("F")


class Redirect(BaseModel):
    """The default fallback: navigate elsewhere, replacing history."""

    model_config = ConfigDict(frozen=True)

    to: str
    replace: bool = True


def default_fallback(landing_route: str | None = None) -> Redirect:
    """Redirect to the authenticated landing route."""
    return Redirect(to=landing_route or settings.landing_route)


def guard(
    requirement: AccessRequirement,
    checker: PermissionChecker,
    render: Callable[[], R],
    fallback: Callable[[], F] | None = None,
    landing_route: str | None = None,
) -> R | F | Redirect:
    """Render a view if the requirement passes, else its fallback.

    Usage:
        page = guard(
            AccessRequirement.permission("view roles"),
            checker,
            render=lambda: roles_page(),
        )

    Args:
        requirement: The view's requirement
        checker: Checker for the current principal
        render: Produces the view; only called on success
        fallback: Produces the replacement view; defaults to a Redirect
        landing_route: Target of the default Redirect; the configured
            landing route if None

    Returns:
        The rendered view, the fallback, or the default Redirect
    """
    if checker.evaluate(requirement):
        return render()
    return _deny(requirement, checker, fallback, landing_route)


def _deny(
    requirement: AccessRequirement,
    checker: PermissionChecker,
    fallback: Callable[[], F] | None,
    landing_route: str | None = None,
) -> F | Redirect:
    logger.info(
        "route_guard_denied",
        requirement=requirement.to_config(),
        principal_id=str(checker.principal.id) if checker.principal else None,
    )
    if fallback is not None:
        return fallback()
    return default_fallback(landing_route)


class RouteGuard:
    """A reusable guard bound to one requirement and fallback.

    Usage:
        roles_guard = RouteGuard(AccessRequirement.permission("view roles"))
        page = roles_guard(checker, render=roles_page)
    """

    def __init__(
        self,
        requirement: AccessRequirement | None = None,
        fallback: Callable[[], Any] | None = None,
        landing_route: str | None = None,
    ) -> None:
        self.requirement = requirement or AccessRequirement.none()
        self.fallback = fallback
        self.landing_route = landing_route

    @classmethod
    def of(
        cls,
        permission: str | None = None,
        permissions: Iterable[str] | None = None,
        require_all: bool = False,
        role: str | None = None,
        fallback: Callable[[], Any] | None = None,
        landing_route: str | None = None,
    ) -> "RouteGuard":
        """Build a guard from the optional clause arguments."""
        return cls(
            AccessRequirement.of(
                permission=permission,
                permissions=permissions,
                require_all=require_all,
                role=role,
            ),
            fallback=fallback,
            landing_route=landing_route,
        )

    def allows(self, checker: PermissionChecker) -> bool:
        return checker.evaluate(self.requirement)

    def __call__(self, checker: PermissionChecker, render: Callable[[], R]) -> Any:
        return guard(
            self.requirement, checker, render, self.fallback, self.landing_route
        )


def _redirect_response(redirect: Redirect) -> RedirectResponse:
    return RedirectResponse(url=redirect.to, status_code=GUARD_REDIRECT_STATUS)


def _app_landing_route(request: Any) -> str | None:
    if isinstance(request, Request):
        return request.app.state.settings.landing_route
    return None


def protected_route(
    permission: str | None = None,
    permissions: Iterable[str] | None = None,
    require_all: bool = False,
    role: str | None = None,
    fallback: Callable[[], Any] | None = None,
    landing_route: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[Any]]]:
    """Decorator that guards an async FastAPI page handler.

    The handler must take a ``session`` keyword argument (use the
    ``CurrentSession`` dependency). On denial the handler is not called
    and the fallback is returned; by default a redirect to the landing
    route. Handlers that also take ``request: Request`` redirect to the
    landing route of the application serving them.

    Usage:
        @router.get("/roles")
        @protected_route(permission="view roles")
        async def roles_page(session: CurrentSession):
            ...

    Args:
        permission: Single permission name
        permissions: Several permission names
        require_all: If True, every name in ``permissions`` is required
        role: Role name
        fallback: Produces the response to return on denial
        landing_route: Redirect target overriding the application's

    Returns:
        Decorator function
    """
    route_guard = RouteGuard.of(
        permission=permission,
        permissions=permissions,
        require_all=require_all,
        role=role,
        fallback=fallback,
        landing_route=landing_route,
    )

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[Any]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            session = cast("SessionSnapshot | None", kwargs.get("session"))
            if session is None or not session.is_authenticated:
                raise UnauthorizedError(
                    "Authentication required",
                    error_code="auth_required",
                )

            checker = PermissionChecker.from_session(session)
            if route_guard.allows(checker):
                return await func(*args, **kwargs)

            result = _deny(
                route_guard.requirement,
                checker,
                route_guard.fallback,
                route_guard.landing_route
                or _app_landing_route(kwargs.get("request")),
            )
            if isinstance(result, Redirect):
                return _redirect_response(result)
            return result

        return wrapper

    return decorator
