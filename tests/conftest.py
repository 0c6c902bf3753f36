"""Pytest configuration and shared fixtures."""

import json
import shutil
import tempfile
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from taskgate.core.permissions.models import Principal
from taskgate.core.session.store import SessionStore
from taskgate.main import create_app
from tests.factories import make_principal


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo per-test structlog configuration bound to pytest's captured streams."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to the temporary directory
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def task_viewer() -> Principal:
    """Principal with the single direct permission "view tasks"."""
    return make_principal(permissions=["view tasks"])


@pytest.fixture
def manager() -> Principal:
    """Principal with only the manager role."""
    return make_principal(roles={"manager": ["view projects", "edit projects"]})


@pytest.fixture
def rating_config_viewer() -> Principal:
    """Principal who can see rating configs but not calculate final ratings."""
    return make_principal(permissions=["view rating configs", "view tasks"])


@pytest.fixture
def session_store() -> SessionStore:
    """Empty session store."""
    return SessionStore()


@pytest.fixture
def app(session_store: SessionStore) -> FastAPI:
    """Application wired to the test session store."""
    return create_app(store=session_store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the test application."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def principal_file(temp_dir: Path, rating_config_viewer: Principal) -> Path:
    """Principal profile written as the login payload JSON."""
    path = temp_dir / "principal.json"
    path.write_text(json.dumps({"user": rating_config_viewer.model_dump(mode="json")}))
    return path
