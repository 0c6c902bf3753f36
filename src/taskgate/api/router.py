"""Root API router with health endpoints and access queries.

Every ``/api/v1/me`` route answers a UI-affordance question for the
current session: what may be shown, which menu entries are visible,
whether a page may be opened. None of it replaces backend enforcement.
"""

from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from taskgate.api.dependencies import AppSettings, Checker, Navigation, Routes
from taskgate.api.schemas import (
    AccessResponse,
    NavigationItem,
    NavigationResponse,
    PermissionsResponse,
    RequirementIn,
)
from taskgate.navigation.filter import filter_visible
from taskgate.routing.routes import GuardOutcome


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


# Create root API router
api_router = APIRouter()

# Health check endpoints (no /api/v1 prefix)
health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def liveness() -> HealthResponse:
    """Liveness probe endpoint."""
    return HealthResponse(status="alive")


@health_router.get("/info", summary="Application info")
async def info(settings: AppSettings) -> dict[str, Any]:
    """Application info endpoint."""
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "landing_route": settings.landing_route,
    }


me_router = APIRouter(prefix="/me", tags=["access"])


@me_router.get("/permissions", response_model=PermissionsResponse)
async def my_permissions(checker: Checker) -> PermissionsResponse:
    """Effective permissions and roles of the current principal."""
    return PermissionsResponse(
        permissions=list(checker.permission_names),
        roles=list(checker.role_names),
    )


@me_router.get("/navigation", response_model=NavigationResponse)
async def my_navigation(checker: Checker, navigation: Navigation) -> NavigationResponse:
    """The navigation tree filtered for the current principal."""
    visible = filter_visible(navigation, checker)
    return NavigationResponse(items=[NavigationItem.from_node(n) for n in visible])


@me_router.post("/access", response_model=AccessResponse)
async def check_my_access(
    requirement: RequirementIn, checker: Checker
) -> AccessResponse:
    """Evaluate an arbitrary requirement for the current principal."""
    return AccessResponse(allowed=checker.evaluate(requirement.to_requirement()))


@me_router.get("/routes", response_model=GuardOutcome)
async def resolve_my_route(
    checker: Checker,
    routes: Routes,
    settings: AppSettings,
    path: str = Query(..., min_length=1, description="Page path, e.g. /roles/5"),
) -> GuardOutcome:
    """Whether the current principal may open a page, and where to go if not."""
    return routes.resolve(path, checker, landing_route=settings.landing_route)


# Create versioned API router
v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(me_router)

# Include routers in main api_router
api_router.include_router(health_router)
api_router.include_router(v1_router)
