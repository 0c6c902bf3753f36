"""Unit tests for navigation visibility filtering."""

import pytest

from taskgate.core.permissions.checker import PermissionChecker
from taskgate.core.permissions.models import Principal
from taskgate.core.permissions.requirements import AccessRequirement
from taskgate.navigation.defaults import DEFAULT_NAVIGATION
from taskgate.navigation.filter import filter_visible, visible_hrefs
from taskgate.navigation.models import NavigationNode
from tests.factories import make_principal


pytestmark = pytest.mark.unit


def _leaf(title: str, permission: str | None = None) -> NavigationNode:
    requirement = (
        AccessRequirement.permission(permission)
        if permission
        else AccessRequirement.none()
    )
    return NavigationNode(title=title, href=f"/{title.lower()}", requirement=requirement)


RATINGS = NavigationNode(
    title="Ratings",
    requirement=AccessRequirement.permissions(
        ["view rating configs", "create task ratings"]
    ),
    children=(
        _leaf("Configurations", "view rating configs"),
        _leaf("Final", "calculate final ratings"),
    ),
)


class TestFilterVisible:
    """Tests for filter_visible."""

    def test_ratings_group_shows_one_child(self, rating_config_viewer: Principal):
        """Parent passes on any-of; only the granted child survives."""
        visible = filter_visible([RATINGS], PermissionChecker(rating_config_viewer))

        assert len(visible) == 1
        assert visible[0].title == "Ratings"
        assert [child.title for child in visible[0].children] == ["Configurations"]

    def test_hidden_parent_hides_subtree(self):
        """Children are never promoted above a hidden parent."""
        principal = make_principal(permissions=["calculate final ratings"])

        assert filter_visible([RATINGS], PermissionChecker(principal)) == ()

    def test_group_with_no_visible_children_is_suppressed(self):
        """The parent passes but every child fails."""
        principal = make_principal(permissions=["create task ratings"])

        assert filter_visible([RATINGS], PermissionChecker(principal)) == ()

    def test_open_leaves_visible_to_anonymous(self):
        nodes = [_leaf("Dashboard"), _leaf("Users", "view users")]

        visible = filter_visible(nodes, PermissionChecker(None))

        assert [n.title for n in visible] == ["Dashboard"]

    def test_preserves_input_order(self, task_viewer: Principal):
        nodes = [_leaf("Zed"), _leaf("Tasks", "view tasks"), _leaf("Alpha")]

        visible = filter_visible(nodes, PermissionChecker(task_viewer))

        assert [n.title for n in visible] == ["Zed", "Tasks", "Alpha"]

    def test_link_with_children_is_a_leaf(self, task_viewer: Principal):
        """A node with a destination is rendered as a link, without a sub-menu."""
        node = NavigationNode(
            title="Tasks",
            href="/tasks",
            requirement=AccessRequirement.permission("view tasks"),
            children=(_leaf("Board", "view tasks"),),
        )

        (visible,) = filter_visible([node], PermissionChecker(task_viewer))

        assert visible.href == "/tasks"
        assert visible.children == ()

    def test_link_whose_children_are_all_hidden_is_suppressed(self):
        node = NavigationNode(
            title="Projects",
            href="/projects",
            children=(_leaf("Board", "view projects"),),
        )

        assert filter_visible([node], PermissionChecker(make_principal())) == ()

    def test_nested_groups(self, task_viewer: Principal):
        tree = [
            NavigationNode(
                title="Work",
                children=(
                    NavigationNode(
                        title="Planning",
                        children=(_leaf("Projects", "view projects"),),
                    ),
                    NavigationNode(
                        title="Doing",
                        children=(_leaf("Tasks", "view tasks"),),
                    ),
                ),
            )
        ]

        (work,) = filter_visible(tree, PermissionChecker(task_viewer))

        assert [n.title for n in work.children] == ["Doing"]
        assert work.children[0].children[0].title == "Tasks"

    def test_idempotent(self, rating_config_viewer: Principal):
        checker = PermissionChecker(rating_config_viewer)

        once = filter_visible(DEFAULT_NAVIGATION, checker)

        assert filter_visible(once, checker) == once

    def test_deterministic(self, rating_config_viewer: Principal):
        checker = PermissionChecker(rating_config_viewer)

        assert filter_visible(DEFAULT_NAVIGATION, checker) == filter_visible(
            DEFAULT_NAVIGATION, checker
        )

    def test_unchanged_nodes_are_returned_as_is(self):
        admin = make_principal(
            permissions=["view rating configs", "calculate final ratings"]
        )

        (ratings,) = filter_visible([RATINGS], PermissionChecker(admin))

        assert ratings is RATINGS

    def test_input_tree_not_mutated(self, rating_config_viewer: Principal):
        filter_visible([RATINGS], PermissionChecker(rating_config_viewer))

        assert len(RATINGS.children) == 2


class TestDefaultNavigation:
    """Tests for the default menu."""

    def test_anonymous_sees_dashboard_only(self):
        visible = filter_visible(DEFAULT_NAVIGATION, PermissionChecker(None))

        assert [n.title for n in visible] == ["Dashboard"]

    def test_visible_hrefs(self, rating_config_viewer: Principal):
        hrefs = visible_hrefs(DEFAULT_NAVIGATION, PermissionChecker(rating_config_viewer))

        assert hrefs == ["/dashboard", "/tasks", "/rating-configs"]

    def test_is_group(self):
        ratings = next(n for n in DEFAULT_NAVIGATION if n.title == "Ratings")

        assert ratings.is_group is True
        assert DEFAULT_NAVIGATION[0].is_leaf is True
