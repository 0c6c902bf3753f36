"""Navigation visibility filtering.

Applies the permission checker to a navigation tree, top-down:

1. A node whose own requirement fails is dropped with its whole subtree.
2. A passing node without children is a visible leaf.
3. A passing node with children is visible only if at least one child
   survives. A group is returned with only its visible children.
4. A passing node with a direct destination and visible children is a
   link, not a sub-menu, so it is returned without its children.

The function is pure: equal inputs give equal outputs, and filtering an
already-filtered tree returns it unchanged.
"""

from collections.abc import Sequence

from taskgate.core.permissions.checker import PermissionChecker
from taskgate.navigation.models import NavigationNode


def filter_visible(
    nodes: Sequence[NavigationNode],
    checker: PermissionChecker,
) -> tuple[NavigationNode, ...]:
    """Return the visible subset of a navigation tree, in input order.

    Args:
        nodes: Configured navigation nodes
        checker: Checker for the current principal

    Returns:
        Visible nodes, groups carrying only their visible children
    """
    visible: list[NavigationNode] = []
    for node in nodes:
        filtered = _filter_node(node, checker)
        if filtered is not None:
            visible.append(filtered)
    return tuple(visible)


def _filter_node(
    node: NavigationNode, checker: PermissionChecker
) -> NavigationNode | None:
    if not checker.evaluate(node.requirement):
        return None

    if not node.children:
        return node

    children = filter_visible(node.children, checker)
    if not children:
        return None
    if node.href is not None:
        return node.model_copy(update={"children": ()})
    if children == node.children:
        return node
    return node.model_copy(update={"children": children})


def visible_hrefs(
    nodes: Sequence[NavigationNode],
    checker: PermissionChecker,
) -> list[str]:
    """Flatten the visible tree to its link destinations, depth-first."""
    hrefs: list[str] = []
    stack = list(reversed(filter_visible(nodes, checker)))
    while stack:
        node = stack.pop()
        if node.href is not None:
            hrefs.append(node.href)
        stack.extend(reversed(node.children))
    return hrefs
