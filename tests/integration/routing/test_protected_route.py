"""Integration tests for the protected_route decorator.

These tests verify the decorator on FastAPI page handlers:
- single permission
- any-of and all-of permission lists
- role
- custom fallback
"""

import pytest
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from taskgate.api.dependencies import CurrentSession
from taskgate.config import Settings
from taskgate.core.permissions.models import Principal
from taskgate.core.session.store import SessionStore
from taskgate.main import create_app
from taskgate.routing.guard import protected_route
from tests.factories import make_principal


pytestmark = pytest.mark.integration


# Create a test router with protected pages
test_router = APIRouter()


@test_router.get("/pages/roles")
@protected_route(permission="view roles")
async def roles_page(session: CurrentSession):
    """Page requiring a single permission."""
    return {"page": "roles"}


@test_router.get("/pages/any")
@protected_route(permissions=["view users", "view tasks"])
async def any_page(session: CurrentSession):
    """Page requiring any of the permissions."""
    return {"page": "any"}


@test_router.get("/pages/all")
@protected_route(permissions=["view users", "view tasks"], require_all=True)
async def all_page(session: CurrentSession):
    """Page requiring all permissions."""
    return {"page": "all"}


@test_router.get("/pages/admin")
@protected_route(
    role="admin",
    fallback=lambda: JSONResponse({"page": "upgrade"}, status_code=200),
)
async def admin_page(session: CurrentSession):
    """Page requiring a role, with its own fallback."""
    return {"page": "admin"}


@test_router.get("/pages/users")
@protected_route(permission="view users")
async def users_page(request: Request, session: CurrentSession):
    """Page that redirects to its own application's landing route."""
    return {"page": "users"}


class TestProtectedRoute:
    """Tests for protected_route on page handlers."""

    @pytest.fixture
    def test_app(self, session_store: SessionStore) -> FastAPI:
        app = create_app(store=session_store)
        app.include_router(test_router)
        return app

    @pytest.fixture
    async def page_client(self, test_app: FastAPI):
        async with AsyncClient(
            transport=ASGITransport(app=test_app), base_url="http://test"
        ) as ac:
            yield ac

    async def test_allowed_renders_page(
        self, page_client: AsyncClient, session_store: SessionStore
    ):
        session_store.publish(make_principal(permissions=["view roles"]))

        response = await page_client.get("/pages/roles")

        assert response.status_code == 200
        assert response.json() == {"page": "roles"}

    async def test_denied_redirects_to_landing_route(
        self,
        page_client: AsyncClient,
        session_store: SessionStore,
        task_viewer: Principal,
    ):
        session_store.publish(task_viewer)

        response = await page_client.get("/pages/roles")

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"

    async def test_any_mode(
        self,
        page_client: AsyncClient,
        session_store: SessionStore,
        task_viewer: Principal,
    ):
        session_store.publish(task_viewer)

        assert (await page_client.get("/pages/any")).status_code == 200
        assert (await page_client.get("/pages/all")).status_code == 303

    async def test_custom_fallback(
        self,
        page_client: AsyncClient,
        session_store: SessionStore,
        task_viewer: Principal,
    ):
        session_store.publish(task_viewer)

        response = await page_client.get("/pages/admin")

        assert response.status_code == 200
        assert response.json() == {"page": "upgrade"}

    async def test_role_allowed(
        self, page_client: AsyncClient, session_store: SessionStore
    ):
        session_store.publish(make_principal(roles={"admin": []}))

        response = await page_client.get("/pages/admin")

        assert response.json() == {"page": "admin"}

    async def test_unauthenticated_is_401_not_redirect(self, page_client: AsyncClient):
        """Login redirects belong to the session layer, not the guard."""
        response = await page_client.get("/pages/roles")

        assert response.status_code == 401

    async def test_redirects_to_serving_app_landing_route(
        self, session_store: SessionStore, task_viewer: Principal
    ):
        app = create_app(
            store=session_store,
            settings=Settings(_env_file=None, landing_route="/home"),
        )
        app.include_router(test_router)
        session_store.publish(task_viewer)

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            response = await ac.get("/pages/users")

        assert response.status_code == 303
        assert response.headers["location"] == "/home"
