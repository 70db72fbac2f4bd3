"""Navigation stack manager for screen-based routing."""
from __future__ import annotations

ROOT = "table_list"


class Navigator:
    """Stack-based navigation with breadcrumbs.

    - Push on enter: navigating forward pushes to stack
    - Pop on Back: returns to previous screen
    - Reset on Home: clears stack to ["table_list"]
    """

    # Screen ID to human-readable label mapping
    SCREEN_LABELS = {
        "table_list": "Tables",
        "table_action": "Query / Scan",
        "results": "Results",
        "item_detail": "Item",
        "json_view": "JSON",
        "help": "Help",
    }

    def __init__(self):
        """Initialize with the table list as the starting screen."""
        self.stack: list[str] = [ROOT]

    def push(self, screen: str) -> None:
        """Navigate to a new screen by pushing onto the stack.

        Pushing the screen that is already current is a no-op; duplicate
        stack entries make Back appear broken.

        Args:
            screen: Screen identifier to navigate to
        """
        if screen != self.current():
            self.stack.append(screen)

    def pop(self) -> str | None:
        """Go back to the previous screen.

        Returns:
            The screen that was popped, or None if at root
        """
        if len(self.stack) > 1:
            return self.stack.pop()
        return None

    def pop_to(self, screen: str) -> None:
        """Pop until `screen` is current (or only the root remains)."""
        while len(self.stack) > 1 and self.current() != screen:
            self.stack.pop()

    def home(self) -> None:
        """Reset navigation to the table list."""
        self.stack = [ROOT]

    def current(self) -> str:
        return self.stack[-1]

    def breadcrumbs(self) -> str:
        """Generate breadcrumb navigation string.

        Returns:
            Breadcrumb path like "Tables > Query / Scan > Results"
        """
        labels = [
            self.SCREEN_LABELS.get(screen, screen)
            for screen in self.stack
        ]
        return " > ".join(labels)

    def depth(self) -> int:
        return len(self.stack)
