"""Query / Scan form for the selected table."""
from __future__ import annotations

import questionary
from rich.panel import Panel

from ...conditions import OPERATORS
from ..components import BRAND_STYLE, nav_choices, render_breadcrumbs
from ..machine import Back, Home, SetField, Submit, ToggleMode
from ..router import Router, register_screen
from ..state import QUERY


def _tabs(mode: str) -> str:
    if mode == QUERY:
        return "[reverse #ff9500] Query [/]  [dim] Scan [/dim]"
    return "[dim] Query [/dim]  [reverse #ff9500] Scan [/]"


@register_screen("table_action")
def show_table_action(router: Router):
    """Collect key values for a Query, or confirm a Scan."""
    router.console.clear()
    render_breadcrumbs(router)

    state = router.state
    table = state.table
    if table is None:
        return Back()

    lines = [f"[bold]Table:[/bold] {table.name}", _tabs(state.mode), ""]
    choices: list = []

    if state.mode == QUERY:
        form = state.form
        lines.append(f"Partition Key ({table.partition_key}): [cyan]{form['partition_value'] or '-'}[/cyan]")
        choices.append(questionary.Choice(f"Partition Key ({table.partition_key})", value="partition_value"))
        if table.sort_key:
            lines.append(f"Sort Key ({table.sort_key}): [cyan]{form['sort_value'] or '-'}[/cyan]")
            lines.append(f"Condition: [cyan]{form['operator']}[/cyan]")
            choices.append(questionary.Choice(f"Sort Key ({table.sort_key})", value="sort_value"))
            choices.append(questionary.Choice("Condition", value="operator"))
            if form["operator"] == "between":
                lines.append(f"Upper bound: [cyan]{form['sort_value_upper'] or '-'}[/cyan]")
                choices.append(questionary.Choice("Upper bound", value="sort_value_upper"))
        choices.append(questionary.Choice("▶ Query", value="submit"))
        choices.append(questionary.Choice("Switch to Scan", value="toggle"))
    else:
        lines.append(f"Scan every item in [cyan]{table.name}[/cyan], {router.settings.DDB_EXPLORER_PAGE_SIZE} per page.")
        choices.append(questionary.Choice(f"▶ Scan {table.name}", value="submit"))
        if table.partition_key:
            choices.append(questionary.Choice("Switch to Query", value="toggle"))

    router.console.print(Panel.fit("\n".join(lines), border_style="#404040"))
    router.console.print()

    choices.extend(nav_choices())
    action = questionary.select("What next?", choices=choices, style=BRAND_STYLE).ask()

    if action is None or action == "back":
        return Back()
    if action == "home":
        return Home()
    if action == "submit":
        return Submit()
    if action == "toggle":
        return ToggleMode()
    if action == "operator":
        value = questionary.select(
            "Condition",
            choices=list(OPERATORS),
            default=state.form["operator"],
            style=BRAND_STYLE,
        ).ask()
    else:
        value = questionary.text(
            "Value:",
            default=state.form.get(action, ""),
            style=BRAND_STYLE,
        ).ask()
    if value is None:
        return None
    return SetField(action, value)
