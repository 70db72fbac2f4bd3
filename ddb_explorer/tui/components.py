"""Reusable UI components for the TUI."""
from __future__ import annotations

from typing import TYPE_CHECKING

import questionary
from questionary import Choice, Separator
from rich.panel import Panel
from rich.text import Text

if TYPE_CHECKING:
    from rich.console import Console

    from .router import Router
    from .state import Notice


# ═══════════════════════════════════════════════════════════════════════════════
# BRAND STYLING
# ═══════════════════════════════════════════════════════════════════════════════

BRAND_STYLE = questionary.Style([
    ("qmark", "fg:#ff9500 bold"),          # Orange accent
    ("question", "bold"),
    ("answer", "fg:#5ac8fa bold"),          # Teal for answers
    ("highlighted", "fg:#ff9500 bold"),     # Highlighted item
    ("pointer", "fg:#ff9500 bold"),         # Arrow pointer
    ("selected", "fg:#5ac8fa"),             # Selected item
])

MAX_CELL_WIDTH = 50


# ═══════════════════════════════════════════════════════════════════════════════
# FORMATTING
# ═══════════════════════════════════════════════════════════════════════════════

def format_with_commas(n: int) -> str:
    return f"{n:,}"


def format_bytes(size: int) -> str:
    """Human-readable size with 1024 steps: "512 B", "1.50 KB", "2.00 GB"."""
    kb = 1024
    mb = 1024 * kb
    gb = 1024 * mb
    if size >= gb:
        return f"{size / gb:.2f} GB"
    if size >= mb:
        return f"{size / mb:.2f} MB"
    if size >= kb:
        return f"{size / kb:.2f} KB"
    return f"{size} B"


def truncate(value: str, width: int = MAX_CELL_WIDTH) -> str:
    if len(value) > width:
        return value[:width - 3] + "..."
    return value


# ═══════════════════════════════════════════════════════════════════════════════
# NAVIGATION HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def nav_choices(include_separator: bool = True) -> list:
    """Standard Back/Home navigation choices.

    Append to every screen's menu for consistent navigation.
    """
    choices: list = []
    if include_separator:
        choices.append(Separator())
    choices.extend([
        Choice(title="← Back", value="back"),
        Choice(title="Tables", value="home"),
    ])
    return choices


# ═══════════════════════════════════════════════════════════════════════════════
# WELCOME BANNER
# ═══════════════════════════════════════════════════════════════════════════════

_BANNER_ART = """\
[bold #ff9500]  ____  ____  ____       _____            _
 |  _ \\|  _ \\| __ )     | ____|_  ___ __ | | ___  _ __ ___ _ __
 | | | | | | |  _ \\ ____|  _| \\ \\/ / '_ \\| |/ _ \\| '__/ _ \\ '__|
 | |_| | |_| | |_) |____| |___ >  <| |_) | | (_) | | |  __/ |
 |____/|____/|____/     |_____/_/\\_\\ .__/|_|\\___/|_|  \\___|_|
                                   |_|[/]"""


def render_welcome_banner(console: Console, profile: str) -> None:
    """Render the ASCII welcome banner with the active profile."""
    console.print(_BANNER_ART, highlight=False)
    console.print(f"[dim]Profile: {profile}[/dim]\n")


# ═══════════════════════════════════════════════════════════════════════════════
# PANELS
# ═══════════════════════════════════════════════════════════════════════════════

def render_breadcrumbs(router: Router) -> None:
    """Render navigation breadcrumbs.

    Args:
        router: Router instance with navigator
    """
    breadcrumbs = router.nav.breadcrumbs()
    router.console.print(f"[dim]{breadcrumbs}[/dim]\n")


def render_notice(console: Console, notice: Notice) -> None:
    """Render a success/failure notice panel.

    Args:
        console: Rich Console for output
        notice: Notice to show
    """
    if notice.is_error:
        icon, style, title = "✗", "red", "Error"
    else:
        icon, style, title = "✓", "green", "Result"

    content = Text.assemble((f"{icon} {notice.title}", f"bold {style}"), "\n\n", notice.message)
    console.print(Panel.fit(content, title=title, border_style=style))
    console.print()


# ═══════════════════════════════════════════════════════════════════════════════
# HELP TEXT
# ═══════════════════════════════════════════════════════════════════════════════

USAGE = """\
DynamoDB TUI Explorer - Terminal interface for browsing DynamoDB tables

USAGE:
    ddb-explorer [--profile PROFILE]

OPTIONS:
    --profile    AWS profile to use (default: dev)
    --help       Show this help message

SHORTCUTS:

Table List:
    ↑/↓         Navigate table list
    Enter       Select table and open query view
    Quit        Quit application

Query/Scan:
    Edit fields, pick a condition, then Run
    Switch      Toggle between Query and Scan
    Back        Return to table list

Results:
    ↑/↓         Navigate results
    Enter       View full item details
    Next/Prev   Load next page / go to previous page
    Back        Return to query view

Item Detail:
    Enter       View a list or map field as formatted JSON
    Download    Save the item as <key>.json
    Back        Return to results

JSON Viewer:
    Line ↑/↓    Scroll line by line
    Page ↓      Scroll down one screen
    Close       Return to item detail

Ctrl+C goes back from any screen (and abandons a running request).

EXAMPLES:
    # Run with default (dev) profile
    ddb-explorer

    # Run with production profile
    ddb-explorer --profile prod

QUERY CONDITIONS:
    =              Exact match
    begins_with    String starts with value
    <, <=, >, >=   Comparison operators
    between        Between two values (asks for an upper bound)
"""
