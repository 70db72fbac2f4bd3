"""Query/Scan results screen."""
from __future__ import annotations

import questionary
from rich.table import Table
from rich.text import Text

from ..components import BRAND_STYLE, nav_choices, render_breadcrumbs, truncate
from ..machine import Back, Home, NextPage, PreviousPage, Select, result_columns
from ..router import Router, register_screen


@register_screen("results")
def show_results(router: Router):
    """Show the current page, projected onto key + preview columns."""
    router.console.clear()
    render_breadcrumbs(router)

    machine = router.machine
    table_info = router.state.table
    if table_info is None:
        return Back()

    records = machine.page_records()
    columns = result_columns(table_info, records)

    table = Table(title=f"[bold]{machine.results_title()}[/bold]", show_header=True, header_style="bold #b8b8b8")
    table.add_column("#", justify="right", style="dim")
    for column in columns:
        table.add_column(column, max_width=50)

    if not records:
        table.add_row("", "No items found.", *[""] * (len(columns) - 1))
    for i, record in enumerate(records, 1):
        table.add_row(str(i), *[Text(truncate(record.display.get(c, ""))) for c in columns])

    router.console.print(table)
    router.console.print()

    choices: list = [
        questionary.Choice(
            f"{i:>2}. " + " | ".join(truncate(record.display.get(c, ""), 30) for c in columns),
            value=i - 1,
        )
        for i, record in enumerate(records, 1)
    ]
    pager = machine.pager
    if pager.can_next() or pager.can_previous():
        choices.append(questionary.Separator())
    if pager.can_next():
        choices.append(questionary.Choice("Next >", value="next"))
    if pager.can_previous():
        choices.append(questionary.Choice("< Previous", value="previous"))
    choices.extend(nav_choices())

    action = questionary.select("Select an item:", choices=choices, style=BRAND_STYLE).ask()

    if action is None or action == "back":
        return Back()
    if action == "home":
        return Home()
    if action == "next":
        return NextPage()
    if action == "previous":
        return PreviousPage()
    return Select(action)
