"""Load and lint navigation configuration.

Navigation menus can be kept in YAML next to the frontend build::

    items:
      - title: Tasks
        href: /tasks
        requirement:
          permission: view tasks
      - title: Ratings
        requirement:
          permissions: [view rating configs, create task ratings]
        children:
          - title: Configurations
            href: /rating-configs
            requirement:
              permission: view rating configs
"""

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pydantic
import structlog
import yaml

from taskgate.core.errors import UnknownPermissionError, ValidationError
from taskgate.core.permissions.catalog import DEFAULT_CATALOG, PermissionCatalog
from taskgate.navigation.models import NavigationNode


logger = structlog.get_logger()


def parse_navigation(data: Any) -> tuple[NavigationNode, ...]:
    """Build navigation nodes from a decoded YAML/JSON document.

    Args:
        data: A mapping with an ``items`` list

    Returns:
        The configured nodes

    Raises:
        ValidationError: If the document is malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise ValidationError(
            "Navigation config must be a mapping with an 'items' list",
            error_code="invalid_navigation_config",
        )

    try:
        return tuple(NavigationNode.model_validate(item) for item in data["items"])
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid navigation config",
            errors=[
                {
                    "field": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                }
                for error in e.errors()
            ],
            error_code="invalid_navigation_config",
        ) from e


def load_navigation(
    path: Path,
    catalog: PermissionCatalog | None = None,
    strict: bool = False,
) -> tuple[NavigationNode, ...]:
    """Read navigation nodes from a YAML file.

    Args:
        path: YAML file to read
        catalog: Catalog to lint against; the default catalog if None
        strict: Raise on unknown permission names instead of logging them

    Returns:
        The configured nodes

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the document is malformed
        UnknownPermissionError: If ``strict`` and a name is not in the catalog
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(
                f"Invalid YAML in {path}: {e}",
                error_code="invalid_navigation_config",
            ) from e

    nodes = parse_navigation(data)
    check_navigation(nodes, catalog or DEFAULT_CATALOG, strict=strict)
    logger.info("navigation_loaded", path=str(path), items=len(nodes))
    return nodes


def lint_navigation(
    nodes: Sequence[NavigationNode],
    catalog: PermissionCatalog,
) -> list[UnknownPermissionError]:
    """Return one problem per node whose requirement names unknown permissions."""
    problems: list[UnknownPermissionError] = []
    for path, node in _walk(nodes, ()):
        unknown = catalog.unknown(node.requirement.permission_names())
        if unknown:
            problems.append(UnknownPermissionError(unknown, source=" > ".join(path)))
    return problems


def check_navigation(
    nodes: Sequence[NavigationNode],
    catalog: PermissionCatalog,
    strict: bool = False,
) -> None:
    """Lint a navigation tree, raising or logging what is found.

    Raises:
        UnknownPermissionError: The first problem, when ``strict``
    """
    problems = lint_navigation(nodes, catalog)
    if problems and strict:
        raise problems[0]
    for problem in problems:
        logger.warning(
            "navigation_unknown_permission",
            node=problem.source,
            permissions=problem.names,
        )


def _walk(
    nodes: Sequence[NavigationNode], parents: tuple[str, ...]
) -> Iterator[tuple[tuple[str, ...], NavigationNode]]:
    for node in nodes:
        path = (*parents, node.title)
        yield path, node
        yield from _walk(node.children, path)
