"""Item detail screen: every attribute of one item."""
from __future__ import annotations

import questionary
from rich.table import Table
from rich.text import Text

from ..components import BRAND_STYLE, nav_choices, render_breadcrumbs, truncate
from ..machine import Back, Export, Home, Select, detail_rows, is_structured
from ..router import Router, register_screen


@register_screen("item_detail")
def show_item_detail(router: Router):
    """Show (field, value) rows with key fields first."""
    router.console.clear()
    render_breadcrumbs(router)

    state = router.state
    record = state.record
    if record is None or state.table is None:
        return Back()

    rows = detail_rows(state.table, record)

    table = Table(title="[bold]Full Item[/bold]", show_header=True, header_style="bold #b8b8b8", expand=True)
    table.add_column("Field", style="#ff9500", no_wrap=True)
    table.add_column("Value")
    for name, value in rows:
        table.add_row(name, Text(value))
    router.console.print(table)
    router.console.print()

    choices: list = []
    for i, (name, value) in enumerate(rows):
        marker = "{…} " if is_structured(record, name) else ""
        choices.append(questionary.Choice(f"{marker}{name}: {truncate(value, 40)}", value=i))
    choices.append(questionary.Separator())
    choices.append(questionary.Choice("Download as JSON", value="export"))
    choices.extend(nav_choices(include_separator=False))

    action = questionary.select(
        "Select a list/map field to view it as JSON:",
        choices=choices,
        style=BRAND_STYLE,
    ).ask()

    if action is None or action == "back":
        return Back()
    if action == "home":
        return Home()
    if action == "export":
        return Export()
    return Select(action)
