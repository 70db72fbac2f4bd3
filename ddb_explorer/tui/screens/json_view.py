"""Read-only JSON view of one list/map field."""
from __future__ import annotations

import questionary
from rich.syntax import Syntax

from ..components import BRAND_STYLE
from ..machine import Back, Scroll, ScrollPage
from ..router import Router, register_screen

# Rows reserved for the header and the scroll prompt.
_CHROME_ROWS = 8


@register_screen("json_view")
def show_json_view(router: Router):
    router.console.clear()

    state = router.state
    height = max(1, router.console.size.height - _CHROME_ROWS)
    lines = router.machine.visible_json_lines(height)
    total = len(state.json_lines)
    first = state.json_offset + 1 if total else 0
    last = state.json_offset + len(lines)

    router.console.print(f"[bold #ff9500]JSON View - {state.json_field}[/]  [dim]lines {first}-{last} of {total}[/dim]\n")
    router.console.print(Syntax("\n".join(lines), "json", theme="monokai", start_line=first or 1, line_numbers=True))
    router.console.print()

    action = questionary.select(
        "",
        choices=[
            questionary.Choice("Page down", value="page"),
            questionary.Choice("Line down", value="down"),
            questionary.Choice("Line up", value="up"),
            questionary.Choice("Close", value="close"),
        ],
        style=BRAND_STYLE,
    ).ask()

    if action == "page":
        return ScrollPage(height)
    if action == "down":
        return Scroll(1)
    if action == "up":
        return Scroll(-1)
    return Back()
