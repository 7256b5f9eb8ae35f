from rich.console import Console
from rich.markup import escape


class ConsoleLogger:
    """Console output for CLI commands."""

    def __init__(self) -> None:
        self.out = Console()
        self.err = Console(stderr=True)

    def info(self, message: str) -> None:
        self.out.print(escape(message), highlight=False)

    def success(self, message: str) -> None:
        self.out.print(f"✓ {escape(message)}", style="green", highlight=False)

    def warning(self, message: str) -> None:
        self.err.print(f"! {escape(message)}", style="yellow", highlight=False)

    def error(self, message: str) -> None:
        self.err.print(f"❌ {escape(message)}", style="bold red", highlight=False)

    def json(self, text: str) -> None:
        self.out.print_json(text)
