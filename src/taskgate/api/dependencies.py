"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from taskgate.config import Settings
from taskgate.core.errors import UnauthorizedError
from taskgate.core.permissions.catalog import PermissionCatalog
from taskgate.core.permissions.checker import PermissionChecker
from taskgate.core.session.store import SessionSnapshot, SessionStore
from taskgate.navigation.models import NavigationNode
from taskgate.routing.routes import RouteTable


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    """Return the process-wide session store."""
    return request.app.state.session_store


def get_session(
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> SessionSnapshot:
    """Get the authenticated session snapshot.

    The snapshot is read once per request, so every check made while
    handling the request sees the same principal.

    Raises:
        UnauthorizedError: If nobody is logged in
    """
    snapshot = store.snapshot
    if not snapshot.is_authenticated:
        raise UnauthorizedError(
            "No active session",
            error_code="not_authenticated",
        )
    return snapshot


def get_checker(
    request: Request,
    session: Annotated[SessionSnapshot, Depends(get_session)],
) -> PermissionChecker:
    """Build a permission checker for the current session."""
    catalog: PermissionCatalog | None = request.app.state.catalog
    return PermissionChecker.from_session(session, catalog=catalog)


def get_navigation(request: Request) -> tuple[NavigationNode, ...]:
    """Return the configured navigation tree."""
    return request.app.state.navigation


def get_route_table(request: Request) -> RouteTable:
    """Return the configured page route table."""
    return request.app.state.routes


# Type aliases for cleaner dependency injection
AppSettings = Annotated[Settings, Depends(get_app_settings)]
CurrentSession = Annotated[SessionSnapshot, Depends(get_session)]
Checker = Annotated[PermissionChecker, Depends(get_checker)]
Navigation = Annotated[tuple[NavigationNode, ...], Depends(get_navigation)]
Routes = Annotated[RouteTable, Depends(get_route_table)]
