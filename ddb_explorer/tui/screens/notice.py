"""Dismissible notice shown in place of the current screen."""
from __future__ import annotations

from rich.prompt import Confirm

from ..components import render_notice
from ..machine import Dismiss
from ..router import Router, register_screen


@register_screen("notice")
def show_notice(router: Router):
    notice = router.state.notice
    if notice is None:
        return None
    render_notice(router.console, notice)
    Confirm.ask("Press Enter to continue", default=True, show_default=False)
    return Dismiss()
