"""Command: taskgate check - Evaluate a requirement for a principal."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table


console = Console()


def check(
    principal_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Principal profile (JSON or YAML)"
    ),
    permission: list[str] = typer.Option(
        [], "--permission", "-p", help="Required permission (repeatable)"
    ),
    any_: bool = typer.Option(
        False, "--any", help="Require any listed permission instead of all"
    ),
    role: str | None = typer.Option(None, "--role", "-r", help="Required role"),
    show: bool = typer.Option(
        False, "--show", "-s", help="Also print the effective permissions"
    ),
) -> None:
    """Evaluate a requirement for a principal.

    Exits with status 0 when access is allowed and 1 when denied.
    """
    from taskgate.core.errors import AppException
    from taskgate.core.permissions import (
        DEFAULT_CATALOG,
        AccessRequirement,
        PermissionChecker,
    )
    from taskgate.utils import load_principal

    try:
        principal = load_principal(principal_file)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(2) from e

    if len(permission) == 1:
        requirement = AccessRequirement.of(permission=permission[0], role=role)
    else:
        requirement = AccessRequirement.of(
            permissions=permission or None,
            require_all=not any_,
            role=role,
        )

    checker = PermissionChecker(principal, catalog=DEFAULT_CATALOG)

    if show:
        table = Table(title="Effective Permissions", show_header=True)
        table.add_column("Permission", style="cyan")
        for name in checker.permission_names:
            table.add_row(name)
        console.print(table)

    unknown = DEFAULT_CATALOG.unknown(requirement.permission_names())
    if unknown:
        console.print(
            f"[yellow]Warning:[/yellow] not in catalog: {', '.join(unknown)}"
        )

    if checker.evaluate(requirement):
        console.print("[green]allowed[/green]")
        return

    console.print("[red]denied[/red]")
    raise typer.Exit(1)
