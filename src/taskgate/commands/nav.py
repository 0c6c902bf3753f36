"""Command: taskgate nav - Show the navigation visible to a principal."""

from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.tree import Tree

from taskgate.navigation.models import NavigationNode


console = Console()


def _add_nodes(tree: Tree, nodes: Sequence[NavigationNode]) -> None:
    for node in nodes:
        label = f"[bold]{node.title}[/bold]"
        if node.href:
            label += f" [dim]{node.href}[/dim]"
        branch = tree.add(label)
        _add_nodes(branch, node.children)


def nav(
    principal_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Principal profile (JSON or YAML)"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Navigation YAML"
    ),
) -> None:
    """Print the navigation tree visible to a principal."""
    from taskgate.core.errors import AppException
    from taskgate.core.permissions import PermissionChecker
    from taskgate.navigation import DEFAULT_NAVIGATION, filter_visible, load_navigation
    from taskgate.utils import load_principal

    try:
        principal = load_principal(principal_file)
        nodes = load_navigation(config) if config else DEFAULT_NAVIGATION
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(2) from e

    visible = filter_visible(nodes, PermissionChecker(principal))
    if not visible:
        console.print("[yellow]Nothing visible.[/yellow]")
        return

    tree = Tree(f"[bold cyan]{principal.name or principal.id}[/bold cyan]")
    _add_nodes(tree, visible)
    console.print(tree)
