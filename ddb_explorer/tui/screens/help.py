"""Help and shortcuts screen."""
from __future__ import annotations

import questionary
from rich.panel import Panel
from rich.text import Text

from ..components import BRAND_STYLE, USAGE, nav_choices, render_breadcrumbs
from ..machine import Back, Home
from ..router import Router, register_screen


@register_screen("help")
def show_help(router: Router):
    """Help screen with keyboard shortcuts and query conditions.

    Args:
        router: Router instance

    Returns:
        Navigation event
    """
    router.console.clear()
    render_breadcrumbs(router)

    router.console.print(Panel.fit(Text(USAGE), title="Help", border_style="#ff9500"))
    router.console.print()

    action = questionary.select(
        "",
        choices=nav_choices(include_separator=False),
        style=BRAND_STYLE,
    ).ask()

    if action == "home":
        return Home()
    return Back()
