"""FastAPI application factory."""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from taskgate.api import api_router
from taskgate.config import Settings, settings as default_settings
from taskgate.core.errors.handlers import register_exception_handlers
from taskgate.core.logging import configure_logging
from taskgate.core.permissions.catalog import DEFAULT_CATALOG, PermissionCatalog
from taskgate.core.session.store import SessionStore
from taskgate.navigation.defaults import DEFAULT_NAVIGATION
from taskgate.navigation.loader import check_navigation, load_navigation
from taskgate.navigation.models import NavigationNode
from taskgate.routing.routes import DEFAULT_ROUTES, RouteTable


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info(
        "application_startup",
        navigation_items=len(app.state.navigation),
        routes=len(app.state.routes),
    )
    yield
    app.state.session_store.clear()
    logger.info("application_shutdown")


def create_app(
    store: SessionStore | None = None,
    navigation: Sequence[NavigationNode] | None = None,
    routes: RouteTable | None = None,
    catalog: PermissionCatalog | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Session store fed by the identity service; a new one if None
        navigation: Navigation tree; read from ``navigation_config`` or the
            default menu if None
        routes: Page route table; the default table if None
        catalog: Permission catalog used for linting and unknown-name warnings
        settings: Settings override

    Returns:
        Configured FastAPI application instance.

    Raises:
        UnknownPermissionError: If ``strict_permission_catalog`` is on and the
            navigation names an unknown permission
    """
    settings = settings or default_settings
    catalog = catalog or DEFAULT_CATALOG
    configure_logging(settings)

    if navigation is None:
        if settings.navigation_config is not None:
            navigation = load_navigation(
                settings.navigation_config,
                catalog=catalog,
                strict=settings.strict_permission_catalog,
            )
        else:
            navigation = DEFAULT_NAVIGATION
    else:
        check_navigation(navigation, catalog, strict=settings.strict_permission_catalog)

    if routes is None:
        routes = DEFAULT_ROUTES
    routes.validate(catalog, strict=settings.strict_permission_catalog)

    app = FastAPI(
        title=settings.app_name,
        description="Role and permission resolution for the task manager UI",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    app.state.settings = settings
    app.state.session_store = store or SessionStore()
    app.state.navigation = tuple(navigation)
    app.state.routes = routes
    app.state.catalog = catalog

    # Register exception handlers for RFC 7807 error responses
    register_exception_handlers(app)

    app.include_router(api_router)

    return app
