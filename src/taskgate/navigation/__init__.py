"""Navigation menus and their visibility filtering."""

from taskgate.navigation.defaults import DEFAULT_NAVIGATION
from taskgate.navigation.filter import filter_visible, visible_hrefs
from taskgate.navigation.loader import (
    check_navigation,
    lint_navigation,
    load_navigation,
    parse_navigation,
)
from taskgate.navigation.models import NavigationNode


__all__ = [
    "DEFAULT_NAVIGATION",
    "NavigationNode",
    "check_navigation",
    "filter_visible",
    "lint_navigation",
    "load_navigation",
    "parse_navigation",
    "visible_hrefs",
]
