"""Main taskgate CLI application."""

import typer
from rich.console import Console

from taskgate import __version__
from taskgate.commands import check, lint, nav, route
from taskgate.core.logging import configure_logging


console = Console()

app = typer.Typer(
    name="taskgate",
    help="Inspect permissions, navigation visibility and route access.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="check")(check.check)
app.command(name="nav")(nav.nav)
app.command(name="lint")(lint.lint)
app.command(name="route")(route.route)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """taskgate CLI - inspect what a principal can see."""
    configure_logging()
    if version:
        console.print(f"[bold cyan]taskgate[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
