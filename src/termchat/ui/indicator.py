"""Loading indicator shown while a markdown block is being buffered."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from rich.console import Console

logger = logging.getLogger(__name__)

FRAMES: tuple[str, ...] = (".  ", ".. ", "...")
CLEAR = "\r    \r"


class LoadingIndicator:
    """Ticking dots drawn at the start of the current terminal line.

    A handle around a single asyncio task: :meth:`start` creates it,
    :meth:`stop` cancels and joins it. Starting while running and stopping
    while idle are both no-ops, so at most one ticker is alive at a time.
    Must be driven from the event loop thread that renders output.
    """

    def __init__(
        self,
        console: Console,
        *,
        interval: float = 0.5,
        enabled: bool | None = None,
    ) -> None:
        self._console = console
        self._interval = interval
        self._enabled = console.is_terminal if enabled is None else enabled
        self._task: asyncio.Task[None] | None = None
        self._drawn = False

    @property
    def running(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        """Start ticking unless already running."""
        if self._task is not None or not self._enabled:
            return
        self._task = asyncio.get_running_loop().create_task(self._tick())
        logger.debug("Loading indicator started")

    async def stop(self) -> None:
        """Stop ticking and clear the indicator region."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        self.erase()
        logger.debug("Loading indicator stopped")

    def erase(self) -> None:
        """Clear whatever frame is currently drawn."""
        if self._drawn:
            self._write(CLEAR)
            self._drawn = False

    async def _tick(self) -> None:
        index = 0
        while True:
            await asyncio.sleep(self._interval)
            self._write("\r" + FRAMES[index])
            self._drawn = True
            index = (index + 1) % len(FRAMES)

    def _write(self, text: str) -> None:
        self._console.file.write(text)
        self._console.file.flush()
