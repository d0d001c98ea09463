"""Rich Console factory and theme for attachments output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ATTACHMENTS_THEME = Theme(
    {
        "att.ok": "bold green",
        "att.error": "bold red",
        "att.warning": "bold yellow",
        "att.op": "bold cyan",
        "att.key": "dim",
        "att.name": "bold blue",
        "att.label": "bold",
        "att.type": "magenta",
        "att.type.unknown": "dim italic",
        "att.impl": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ATTACHMENTS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(type_key: str | None) -> str:
    """Return the Rich style name for a field type (unknown types are dimmed)."""
    return "att.type" if type_key else "att.type.unknown"
