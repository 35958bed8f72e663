"""Rich Console factory and theme for linearctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LINEAR_THEME = Theme(
    {
        "lin.ok": "bold green",
        "lin.error": "bold red",
        "lin.warning": "bold yellow",
        "lin.op": "bold cyan",
        "lin.key": "dim",
        "lin.id": "bold blue",
        "lin.title": "bold",
        "lin.priority.urgent": "bold red",
        "lin.priority.high": "yellow",
        "lin.priority.medium": "cyan",
        "lin.priority.low": "dim",
    }
)

# Linear priorities: 0 none, 1 urgent, 2 high, 3 medium, 4 low.
_PRIORITY_STYLES: dict[int, str] = {
    1: "lin.priority.urgent",
    2: "lin.priority.high",
    3: "lin.priority.medium",
    4: "lin.priority.low",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=LINEAR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_priority(priority: object) -> str:
    """Return the Rich style name for an issue priority."""
    if isinstance(priority, int) and not isinstance(priority, bool):
        return _PRIORITY_STYLES.get(priority, "")
    return ""
