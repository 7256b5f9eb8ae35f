"""User-facing notifications for failed requests."""

from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape


@runtime_checkable
class Notifier(Protocol):
    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Show notifications as single red lines on stderr."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def error(self, message: str) -> None:
        self.console.print(f"⚠ {escape(message)}", style="bold red", highlight=False)
