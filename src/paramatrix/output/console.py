"""Rich Console factory and theme for paramatrix output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_report() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PARAMATRIX_THEME = Theme(
    {
        "pmx.ok": "bold green",
        "pmx.error": "bold red",
        "pmx.warning": "bold yellow",
        "pmx.subject": "bold cyan",
        "pmx.source": "bold",
        "pmx.case": "bold blue",
        "pmx.operation": "green",
        "pmx.dim": "dim",
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
        theme=PARAMATRIX_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
