"""Main router and screen registry for the TUI."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from .components import render_welcome_banner
from .machine import Back

if TYPE_CHECKING:
    from rich.console import Console

    from ..settings import Settings
    from .machine import NavigationStateMachine
    from .worker import ThreadDispatcher

logger = logging.getLogger(__name__)

# How long one wait on the completion queue may block while loading.
POLL_INTERVAL = 0.1


class Router:
    """Main UI loop with screen dispatch.

    One pass of the loop:
    1. drain background completions into the state machine (arrival order);
    2. if a request is outstanding, show the loading screen and wait on the
       completion queue instead of reading input;
    3. otherwise render the live screen (or the pending notice) and feed
       the event it returns back into the state machine.
    """

    def __init__(
        self,
        console: Console,
        settings: Settings,
        machine: NavigationStateMachine,
        dispatcher: ThreadDispatcher,
    ):
        """Initialize router with dependencies.

        Args:
            console: Rich Console for output
            settings: Application settings
            machine: Navigation state machine for this session
            dispatcher: Background dispatcher whose queue is drained here
        """
        self.console = console
        self.settings = settings
        self.machine = machine
        self.dispatcher = dispatcher

    @property
    def state(self):
        return self.machine.state

    @property
    def nav(self):
        return self.machine.nav

    def pump(self) -> None:
        """Apply every completion that has already arrived."""
        for message in self.dispatcher.drain():
            self.machine.apply(message)

    def run(self) -> None:
        """Run the main loop until the session ends."""
        self.machine.start()

        while self.state.running:
            self.pump()

            if self.state.loading is not None:
                self._wait_for_completion()
                continue

            if self.state.notice is not None:
                screen_id = "notice"
            else:
                screen_id = self.nav.current()
                logger.debug("Rendering %s (depth %d)", screen_id, self.nav.depth())

            screen_fn = SCREENS.get(screen_id)
            if screen_fn is None:
                self.console.print(
                    f"[yellow]Warning:[/yellow] Unknown screen '{screen_id}', "
                    "returning to table list"
                )
                self.nav.home()
                continue

            try:
                event = screen_fn(self)
            except KeyboardInterrupt:
                # Ctrl+C behaves like Back on every screen.
                event = Back()

            if event is not None:
                self.machine.handle(event)

        self.console.print("\n[dim]👋 Goodbye![/]")

    def _wait_for_completion(self) -> None:
        """Show the loading indicator until a completion arrives (or Ctrl+C)."""
        if self.state.loading_slot == "tables" and not self.state.tables_loaded:
            self.console.clear()
            render_welcome_banner(self.console, self.state.profile)
        try:
            with self.console.status(f"[bold]{self.state.loading}[/bold]", spinner="dots"):
                while True:
                    message = self.dispatcher.wait(POLL_INTERVAL)
                    if message is not None:
                        self.machine.apply(message)
                        return
        except KeyboardInterrupt:
            logger.info("Outstanding %s request abandoned by user", self.state.loading_slot)
            self.machine.handle(Back())


# Screen registry - maps screen IDs to handler functions
SCREENS: dict[str, Callable[[Router], Any]] = {}


def register_screen(screen_id: str):
    """Decorator to register a screen function.

    Usage:
        @register_screen("table_list")
        def show_table_list(router: Router) -> object | None:
            ...
    """
    def decorator(fn: Callable[[Router], Any]):
        SCREENS[screen_id] = fn
        return fn
    return decorator
