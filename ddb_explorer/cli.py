from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from .client import RetrievalClient
from .errors import BackendError, ConfigError
from .logging import setup_logging
from .settings import Settings, load_settings, validate_profile
from .tui.components import USAGE

app = typer.Typer(
    add_completion=False,
    help="ddb-explorer: browse DynamoDB tables from the terminal",
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


def _show_help(value: bool) -> None:
    if value:
        console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(code=0)


# ═══════════════════════════════════════════════════════════════════════════════
# INTERACTIVE SESSION
# ═══════════════════════════════════════════════════════════════════════════════

def run_tui(settings: Settings, client: RetrievalClient, profile: str) -> None:
    """Run the interactive browser until the user quits."""
    from .tui import NavigationStateMachine, Navigator, Router, UIState
    from .tui import screens  # noqa: F401  (registers screens)
    from .tui.worker import ThreadDispatcher

    dispatcher = ThreadDispatcher()
    machine = NavigationStateMachine(
        client,
        dispatcher,
        state=UIState(profile=profile),
        nav=Navigator(),
        export_dir=settings.DDB_EXPLORER_EXPORT_DIR,
    )
    Router(console=console, settings=settings, machine=machine, dispatcher=dispatcher).run()


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND
# ═══════════════════════════════════════════════════════════════════════════════

@app.command(add_help_option=False)
def explore(
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        "-p",
        help="AWS profile to use (dev or prod)",
    ),
    show_help: bool = typer.Option(
        False,
        "--help",
        "-h",
        is_eager=True,
        callback=_show_help,
        help="Show help and usage information",
    ),
):
    """Browse DynamoDB tables interactively."""
    settings = load_settings()

    try:
        name = validate_profile(settings, profile)
    except ConfigError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    setup_logging(settings)

    try:
        client = RetrievalClient.connect(name, settings)
    except BackendError as e:
        err_console.print(f"[red]Failed to create AWS client:[/red] {e}")
        raise typer.Exit(code=1)

    try:
        client.test_connection()
    except BackendError as e:
        err_console.print(f"[red]Failed to connect to AWS:[/red] {e}")
        raise typer.Exit(code=1)

    console.print("[green]✓ Connected to AWS successfully[/green]")
    run_tui(settings, client, name)


def main():
    app()
