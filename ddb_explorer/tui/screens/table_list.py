"""Table list screen: entry point for the TUI."""
from __future__ import annotations

import questionary
from rich.table import Table

from ..components import (
    BRAND_STYLE,
    format_bytes,
    format_with_commas,
    render_welcome_banner,
)
from ..machine import Quit, Refresh, Select, ShowHelp
from ..router import Router, register_screen


@register_screen("table_list")
def show_table_list(router: Router):
    """Show every table, largest item count first."""
    router.console.clear()
    render_welcome_banner(router.console, router.state.profile)

    state = router.state
    table = Table(show_header=True, header_style="bold #b8b8b8", expand=True)
    table.add_column("Table Name", min_width=20)
    table.add_column("Status", justify="center")
    table.add_column("Item Count", justify="right")
    table.add_column("Size", justify="right")

    if state.tables_error:
        table.add_row(f"[red]Error: {state.tables_error}[/red]", "", "", "")
    elif not state.tables:
        table.add_row("No tables found.", "", "", "")
    else:
        for t in state.tables:
            table.add_row(t.name, t.status, format_with_commas(t.item_count), format_bytes(t.size_bytes))

    router.console.print(table)
    router.console.print()

    choices: list = [
        questionary.Choice(t.name, value=i) for i, t in enumerate(state.tables)
    ]
    choices.extend([
        questionary.Separator(),
        questionary.Choice("Reload tables", value="refresh"),
        questionary.Choice("Help", value="help"),
        questionary.Choice("Quit", value="quit"),
    ])

    choice = questionary.select(
        "Select a table:",
        choices=choices,
        style=BRAND_STYLE,
    ).ask()

    if choice is None or choice == "quit":
        return Quit()
    if choice == "refresh":
        return Refresh()
    if choice == "help":
        return ShowHelp()
    return Select(choice)
