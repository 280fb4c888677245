"""Rich Console factory and theme.

Consoles render into a StringIO buffer so every renderer keeps a plain
``-> str`` contract. Without a terminal (tests, pipes) Rich drops color
codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

RP_THEME = Theme(
    {
        "rp.ok": "bold green",
        "rp.error": "bold red",
        "rp.warning": "bold yellow",
        "rp.command": "cyan",
        "rp.package": "cyan",
        "rp.path": "green",
        "rp.name": "red",
        "rp.bullet": "bold red",
        "rp.key": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width for stable output.
    """
    return Console(
        file=StringIO(),
        theme=RP_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
