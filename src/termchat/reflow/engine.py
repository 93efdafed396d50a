"""Incremental markdown reflow engine.

Consumes a reply as it streams in, one text delta at a time, and turns it
into an ordered list of :mod:`termchat.types.render` commands:

- Plain prose is emitted as soon as its line is complete.
- Fenced code, lists and tables are buffered and emitted as one unit when
  the block closes, so the markdown renderer sees the whole structure
  (tables need every row for column alignment, code needs both fences).
- While a block is buffering, the loading indicator is asked to run.

The engine never performs I/O. Callers execute the returned commands in
order. A fresh engine is used for each streamed reply.
"""

from __future__ import annotations

from termchat.reflow.classify import fence_token, is_continuation, is_list_item, is_table_row
from termchat.types.render import (
    BlankLinePolicy,
    BlockMode,
    Render,
    RenderCommand,
    StartIndicator,
    StopIndicator,
)


class ReflowEngine:
    """Line-oriented state machine over streamed markdown.

    Only complete lines are classified. Text after the last newline waits in
    :attr:`partial` until more input arrives or :meth:`flush` is called.
    """

    def __init__(
        self, *, blank_lines: BlankLinePolicy = BlankLinePolicy.PRESERVE_IN_CODE,
    ) -> None:
        self._blank_lines = blank_lines
        self._partial = ""
        self._block: list[str] = []
        self._mode = BlockMode.NONE
        self._fence: str | None = None
        self._indicator_active = False

    @property
    def mode(self) -> BlockMode:
        return self._mode

    @property
    def partial(self) -> str:
        return self._partial

    @property
    def block_text(self) -> str:
        return "\n".join(self._block)

    @property
    def indicator_active(self) -> bool:
        return self._indicator_active

    # -- Public interface --------------------------------------------------------

    def feed(self, delta: str) -> list[RenderCommand]:
        """Consume one delta and return the commands it completes."""
        self._partial += delta
        if "\n" not in self._partial:
            return []

        *lines, self._partial = self._partial.split("\n")
        commands: list[RenderCommand] = []
        for line in lines:
            self._consume(line, commands)
        return commands

    def flush(self) -> list[RenderCommand]:
        """End of stream: emit everything still buffered.

        A trailing line without a newline is classified like any other line.
        An open block, including a code fence that never closed, is rendered
        as-is. Afterwards the engine is back in its initial state.
        """
        commands: list[RenderCommand] = []
        if self._partial:
            line, self._partial = self._partial, ""
            self._consume(line, commands)
        self._close_block(commands)
        return commands

    # -- Transitions -------------------------------------------------------------

    def _consume(self, line: str, out: list[RenderCommand]) -> None:
        line = line.removesuffix("\r")
        if not line:
            if (
                self._mode is BlockMode.CODE
                and self._blank_lines is BlankLinePolicy.PRESERVE_IN_CODE
            ):
                self._block.append(line)
            return

        token = fence_token(line)

        if self._mode is BlockMode.CODE:
            # Code content is never re-classified.
            self._block.append(line)
            if token is not None and token == self._fence:
                self._close_block(out)
            return

        if token is not None:
            self._extend_block(BlockMode.CODE, line, out)
            self._fence = token
            return

        if is_list_item(line) or (self._mode is BlockMode.LIST and is_continuation(line)):
            self._extend_block(BlockMode.LIST, line, out)
            return

        if is_table_row(line):
            self._extend_block(BlockMode.TABLE, line, out)
            return

        self._close_block(out)
        out.append(Render(line))

    def _extend_block(self, mode: BlockMode, line: str, out: list[RenderCommand]) -> None:
        """Append *line* to a block of kind *mode*, closing any other open block first."""
        if self._mode is not mode:
            self._close_block(out)
            self._mode = mode
            if not self._indicator_active:
                self._indicator_active = True
                out.append(StartIndicator())
        self._block.append(line)

    def _close_block(self, out: list[RenderCommand]) -> None:
        if self._mode is BlockMode.NONE:
            return
        if self._block:
            out.append(Render("\n".join(self._block)))
        self._block = []
        self._mode = BlockMode.NONE
        self._fence = None
        if self._indicator_active:
            self._indicator_active = False
            out.append(StopIndicator())
