"""Command: taskgate lint - Check navigation config against the catalog."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table


console = Console()


def lint(
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="Navigation YAML"
    ),
) -> None:
    """Report navigation entries that name unknown permissions.

    Checks the default menu when no config is given.
    """
    from taskgate.core.errors import AppException
    from taskgate.core.permissions import DEFAULT_CATALOG
    from taskgate.navigation import DEFAULT_NAVIGATION, lint_navigation
    from taskgate.navigation.loader import parse_navigation
    from taskgate.utils import read_document

    try:
        nodes = parse_navigation(read_document(config)) if config else DEFAULT_NAVIGATION
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(2) from e

    problems = lint_navigation(nodes, DEFAULT_CATALOG)
    if not problems:
        console.print("[green]No unknown permissions.[/green]")
        return

    table = Table(title="Unknown Permissions", show_header=True)
    table.add_column("Entry", style="cyan")
    table.add_column("Permissions", style="red")
    for problem in problems:
        table.add_row(problem.source or "", ", ".join(problem.names))

    console.print(table)
    raise typer.Exit(1)
