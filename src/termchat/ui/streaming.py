"""Stream driver: feeds a streamed reply through the reflow engine."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from termchat.errors import StreamError
from termchat.reflow.engine import ReflowEngine
from termchat.types.providers import StreamEvent
from termchat.types.render import BlankLinePolicy
from termchat.ui.terminal import TerminalSink

logger = logging.getLogger(__name__)


class StreamDriver:
    """Pulls text deltas from a provider stream and writes them to a sink.

    With ``reflow`` enabled every delta goes through a fresh
    :class:`ReflowEngine` and the resulting commands are executed in order.
    Without it, deltas are written raw as they arrive.
    """

    def __init__(
        self,
        sink: TerminalSink,
        *,
        reflow: bool = True,
        blank_lines: BlankLinePolicy = BlankLinePolicy.PRESERVE_IN_CODE,
    ) -> None:
        self._sink = sink
        self._reflow = reflow
        self._blank_lines = blank_lines

    async def run(self, events: AsyncIterator[StreamEvent]) -> str:
        """Consume *events* until the reply ends and return the full text.

        On a stream failure, buffered output is still flushed and the
        indicator stopped before :class:`StreamError` is raised with the
        partial text.
        """
        engine = ReflowEngine(blank_lines=self._blank_lines) if self._reflow else None
        parts: list[str] = []
        failure: Exception | None = None

        try:
            async for event in events:
                if event.type == "message_end":
                    break
                if event.type != "text_delta" or not event.text:
                    continue
                parts.append(event.text)
                if engine is None:
                    self._sink.write_raw(event.text)
                    continue
                for command in engine.feed(event.text):
                    await self._sink.execute(command)
        except Exception as exc:
            logger.warning("Response stream failed: %s", exc)
            failure = exc
        finally:
            await self._finish(engine, events)

        text = "".join(parts)
        if failure is not None:
            raise StreamError(str(failure) or type(failure).__name__, text=text) from failure
        return text

    async def _finish(
        self, engine: ReflowEngine | None, events: AsyncIterator[StreamEvent],
    ) -> None:
        if engine is not None:
            for command in engine.flush():
                await self._sink.execute(command)
        await self._sink.close()
        self._sink.write_raw("\n")

        aclose = getattr(events, "aclose", None)
        if aclose is not None:
            try:
                await aclose()
            except Exception as exc:
                logger.debug("Closing response stream failed: %s", exc)
