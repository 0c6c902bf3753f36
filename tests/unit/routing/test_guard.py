"""Unit tests for the route guard."""

import pytest

from taskgate.config import settings
from taskgate.core.permissions.checker import PermissionChecker
from taskgate.core.permissions.models import Principal
from taskgate.core.permissions.requirements import AccessRequirement
from taskgate.routing.guard import Redirect, RouteGuard, default_fallback, guard
from tests.factories import make_principal


pytestmark = pytest.mark.unit


class TestGuard:
    """Tests for the guard function."""

    def test_renders_children_when_allowed(self, task_viewer: Principal):
        result = guard(
            AccessRequirement.permission("view tasks"),
            PermissionChecker(task_viewer),
            render=lambda: "tasks page",
        )

        assert result == "tasks page"

    def test_default_fallback_redirects_to_landing_route(
        self, task_viewer: Principal
    ):
        """Denied without an explicit fallback: redirect, not the children."""
        rendered: list[str] = []

        result = guard(
            AccessRequirement.permission("view roles"),
            PermissionChecker(task_viewer),
            render=lambda: rendered.append("roles page"),
        )

        assert result == Redirect(to=settings.landing_route)
        assert result.to == "/dashboard"
        assert result.replace is True
        assert rendered == []

    def test_default_fallback_uses_given_landing_route(self, task_viewer: Principal):
        result = guard(
            AccessRequirement.permission("view roles"),
            PermissionChecker(task_viewer),
            render=lambda: "roles page",
            landing_route="/home",
        )

        assert result == Redirect(to="/home")
        assert RouteGuard(
            AccessRequirement.permission("view roles"), landing_route="/home"
        )(PermissionChecker(task_viewer), render=lambda: "roles page") == result

    def test_landing_route_is_not_login(self):
        assert default_fallback().to != settings.login_route

    def test_custom_fallback(self, task_viewer: Principal):
        result = guard(
            AccessRequirement.role("admin"),
            PermissionChecker(task_viewer),
            render=lambda: "admin page",
            fallback=lambda: "access denied",
        )

        assert result == "access denied"

    def test_open_requirement_renders_for_anyone(self):
        result = guard(
            AccessRequirement.none(), PermissionChecker(None), render=lambda: "home"
        )

        assert result == "home"


class TestRouteGuard:
    """Tests for the RouteGuard class."""

    def test_of_builds_combined_requirement(self):
        route_guard = RouteGuard.of(permission="view users", role="admin")

        assert route_guard.requirement == AccessRequirement.of(
            permission="view users", role="admin"
        )

    def test_defaults_to_open(self):
        assert RouteGuard().requirement.is_open

    def test_any_mode(self, task_viewer: Principal):
        route_guard = RouteGuard.of(permissions=["view users", "view tasks"])

        assert route_guard(PermissionChecker(task_viewer), render=lambda: "ok") == "ok"

    def test_all_mode(self, task_viewer: Principal):
        route_guard = RouteGuard.of(
            permissions=["view users", "view tasks"], require_all=True
        )

        result = route_guard(PermissionChecker(task_viewer), render=lambda: "ok")

        assert isinstance(result, Redirect)

    def test_uses_own_fallback(self):
        route_guard = RouteGuard.of(role="admin", fallback=lambda: "nope")
        checker = PermissionChecker(make_principal(roles={"manager": []}))

        assert route_guard.allows(checker) is False
        assert route_guard(checker, render=lambda: "ok") == "nope"
