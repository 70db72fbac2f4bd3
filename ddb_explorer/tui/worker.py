"""Background dispatch of backend calls.

Backend calls run on daemon threads. Each finished call posts a Completed
message onto a queue; the UI loop drains the queue and applies messages in
arrival order. Worker threads never touch session state.
"""
from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable

from ..errors import BackendError, ExplorerError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Completed:
    """Result (or failure) of one background call.

    Attributes:
        slot: Logical operation slot ("tables" or "results")
        generation: Slot generation the request was issued under
        kind: What was requested ("tables", "first" or "next")
        value: Call result when it succeeded
        error: Exception when it failed
        params: Query parameters the request was issued with, if any
    """

    slot: str
    generation: int
    kind: str
    value: Any = None
    error: ExplorerError | None = None
    params: Any = None


class ThreadDispatcher:
    """Runs jobs on daemon threads and collects their completions."""

    def __init__(self):
        self.messages: queue.Queue[Completed] = queue.Queue()

    def submit(self, slot: str, generation: int, kind: str, job: Callable[[], Any], params: Any = None) -> None:
        """Start `job` in the background.

        Args:
            slot: Logical operation slot
            generation: Slot generation at submit time
            kind: Request kind, echoed in the message
            job: Zero-argument callable doing the backend work
            params: Echoed in the message
        """

        def _run() -> None:
            try:
                value = job()
            except ExplorerError as e:
                self.messages.put(Completed(slot, generation, kind, error=e, params=params))
                return
            except Exception as e:
                # A bug, not a backend failure; still release the loading screen.
                logger.exception("Background %s job crashed", kind)
                self.messages.put(Completed(slot, generation, kind, error=BackendError(str(e)), params=params))
                return
            self.messages.put(Completed(slot, generation, kind, value=value, params=params))

        thread = threading.Thread(target=_run, name=f"ddb-{slot}-{generation}", daemon=True)
        thread.start()

    def drain(self) -> list[Completed]:
        """Return every message that has arrived, without blocking."""
        out: list[Completed] = []
        while True:
            try:
                out.append(self.messages.get_nowait())
            except queue.Empty:
                return out

    def wait(self, timeout: float) -> Completed | None:
        """Block up to `timeout` seconds for the next message."""
        try:
            return self.messages.get(timeout=timeout)
        except queue.Empty:
            return None
