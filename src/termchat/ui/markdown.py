"""Markdown-to-terminal rendering."""

from __future__ import annotations

import io

from rich.console import Console
from rich.markdown import Markdown

DEFAULT_CODE_THEME = "monokai"


def render_markdown(
    text: str,
    width: int,
    *,
    color_system: str | None = "standard",
    code_theme: str = DEFAULT_CODE_THEME,
) -> str:
    """Render *text* as markdown for a terminal *width* columns wide.

    Pure: output is captured into a string, nothing is written.
    """
    buf = io.StringIO()
    console = Console(
        file=buf,
        width=max(width, 1),
        color_system=color_system,  # type: ignore[arg-type]
        force_terminal=color_system is not None,
        highlight=False,
    )
    console.print(Markdown(text, code_theme=code_theme))
    return buf.getvalue()
