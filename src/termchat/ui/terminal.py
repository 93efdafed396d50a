"""Rich-powered terminal output."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from rich.console import Console
from rich.text import Text

from termchat.types.render import Render, RenderCommand, StartIndicator, StopIndicator
from termchat.ui.indicator import LoadingIndicator
from termchat.ui.markdown import render_markdown

logger = logging.getLogger(__name__)

# ── Palette ──────────────────────────────────────────────────────────────────

STYLE_LABEL = "bold #a78bfa"      # violet: speaker labels
STYLE_INFO = "#7c7c8a"            # muted grey
STYLE_SUCCESS = "#34d399"         # green
STYLE_ERROR_LABEL = "bold #f87171"
STYLE_ERROR_BODY = "#f87171"

Renderer = Callable[[str, int], str]
WidthSource = Callable[[], int]


class TerminalSink:
    """The single writer for reply output.

    Executes render commands strictly in the order given. Rendering, raw
    writes and the loading indicator all go through one console so their
    output never interleaves.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        renderer: Renderer | None = None,
        width_source: WidthSource | None = None,
        indicator_interval: float = 0.5,
    ) -> None:
        self._console = console or Console()
        self._renderer = renderer or partial(
            render_markdown, color_system=self._console.color_system,
        )
        self._width_source = width_source or (lambda: self._console.width)
        self._indicator = LoadingIndicator(self._console, interval=indicator_interval)

    @property
    def console(self) -> Console:
        return self._console

    @property
    def indicator(self) -> LoadingIndicator:
        return self._indicator

    async def execute(self, command: RenderCommand) -> None:
        """Carry out one command from the reflow engine."""
        match command:
            case Render(text=text):
                self.render(text)
            case StartIndicator():
                self._indicator.start()
            case StopIndicator():
                await self._indicator.stop()

    def render(self, text: str) -> None:
        """Render *text* as markdown at the current terminal width.

        If the renderer fails, the raw text is written instead.
        """
        self._indicator.erase()
        width = self._width_source()
        try:
            output = self._renderer(text, width)
        except Exception as exc:
            logger.warning("Markdown rendering failed (%s); writing raw text", exc)
            output = text + "\n"
        self._write(output)

    def write_raw(self, text: str) -> None:
        """Write *text* exactly as received (unformatted mode)."""
        self._write(text)

    async def close(self) -> None:
        """Stop the indicator if it is still running."""
        await self._indicator.stop()

    def _write(self, text: str) -> None:
        self._console.file.write(text)
        self._console.file.flush()


class StatusPrinter:
    """Styled one-line messages for the interactive loop."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def label(self, name: str) -> None:
        self._console.print(Text(f"{name}:", style=STYLE_LABEL))

    def info(self, message: str) -> None:
        self._console.print(Text(message, style=STYLE_INFO))

    def success(self, message: str) -> None:
        self._console.print(Text(message, style=STYLE_SUCCESS))

    def error(self, message: str) -> None:
        line = Text("✗ ", style=STYLE_ERROR_LABEL)
        line.append(message, style=STYLE_ERROR_BODY)
        self._console.print(line)

    def plain(self, message: str = "") -> None:
        self._console.print(message, highlight=False, markup=False)

    def prompt(self, message: str) -> None:
        self._console.print(Text(message, style=STYLE_LABEL), end="")
