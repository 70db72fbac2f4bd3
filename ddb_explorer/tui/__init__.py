"""TUI (Terminal User Interface) module for ddb_explorer.

Provides the navigation state machine and the screen-based router that
drives it.
"""
from .machine import NavigationStateMachine
from .navigator import Navigator
from .router import Router
from .state import UIState

__all__ = ["NavigationStateMachine", "Navigator", "Router", "UIState"]
