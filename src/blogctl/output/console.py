"""Rich Console factory and theme for blogctl output.

Consoles render to a StringIO buffer so renderers keep a
``render_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BLOG_THEME = Theme(
    {
        "blog.ok": "bold green",
        "blog.error": "bold red",
        "blog.op": "bold cyan",
        "blog.key": "dim",
        "blog.path": "blue",
        "blog.title": "bold",
        "blog.date": "magenta",
        "blog.draft": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=BLOG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
