"""Screen modules for the TUI."""
from __future__ import annotations

# Import all screen modules to register them with the router
from . import (
    help,
    item_detail,
    json_view,
    notice,
    results,
    table_action,
    table_list,
)

__all__ = [
    "help",
    "item_detail",
    "json_view",
    "notice",
    "results",
    "table_action",
    "table_list",
]
