"""Command: taskgate route - Ask the route guard about a page path."""

from pathlib import Path

import typer
from rich.console import Console


console = Console()


def route(
    principal_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Principal profile (JSON or YAML)"
    ),
    path: str = typer.Argument(..., help="Page path, e.g. /roles/5/edit"),
) -> None:
    """Show whether a principal may open a page.

    Exits with status 1 when the guard would redirect.
    """
    from taskgate.core.errors import AppException
    from taskgate.core.permissions import PermissionChecker
    from taskgate.routing import DEFAULT_ROUTES
    from taskgate.utils import load_principal

    try:
        principal = load_principal(principal_file)
        outcome = DEFAULT_ROUTES.resolve(path, PermissionChecker(principal))
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(2) from e

    if outcome.allowed:
        console.print(f"[green]allowed[/green] {outcome.path}")
        return

    console.print(f"[red]redirect[/red] {outcome.path} -> {outcome.redirect_to}")
    raise typer.Exit(1)
