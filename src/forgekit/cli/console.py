"""Console output for the banner and the CLI error boundary.

Rich is imported lazily so that ``--help``, ``--version`` and the error
boundary keep working when it is not installed; output then degrades to
plain text on stderr.  Regular command output goes through the logging
facade, not through this module.
"""

from __future__ import annotations

import sys
from typing import Any

from forgekit.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``MissingDependencyError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console writing to stderr."""
    return _load_rich_console_class()(stderr=True)


class _ConsoleProxy:
    """``print``-like front end choosing Rich or plain stderr per call."""

    def print(self, *objects: object, markup: bool = True) -> None:
        """Print *objects*; pass ``markup=False`` for literal text."""
        try:
            rich_console = get_rich_console()
        except MissingDependencyError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects, markup=markup, highlight=markup)

    def error(self, message: object, hint: str | None = None) -> None:
        """Render an error line and an optional hint line."""
        try:
            rich_console = get_rich_console()
        except MissingDependencyError:
            print(f"Error: {message}", file=sys.stderr)
            if hint:
                print(f"Hint: {hint}", file=sys.stderr)
            return
        from rich.markup import escape

        rich_console.print(f"[bold red]Error:[/bold red] {escape(str(message))}")
        if hint:
            rich_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


console = _ConsoleProxy()
