"""Test fixtures: scripted providers and captured terminals."""

from __future__ import annotations

from collections.abc import AsyncIterator
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from termchat.types.providers import ChatMessage, StreamEvent
from termchat.types.render import RenderCommand


class ScriptedProvider:
    """A deterministic provider for testing.

    Usage:
        provider = ScriptedProvider(
            deltas=["Hello ", "world\\n"],
            completions=["My_Title"],
        )

    ``fail_after`` raises ``ConnectionError`` once that many deltas have
    been streamed.
    """

    def __init__(
        self,
        deltas: list[str] | None = None,
        *,
        completions: list[str] | None = None,
        fail_after: int | None = None,
        model: str = "mock-model",
    ) -> None:
        self.deltas = list(deltas or [])
        self.completions = list(completions or [])
        self.fail_after = fail_after
        self.stream_calls: list[list[ChatMessage]] = []
        self.complete_calls: list[list[ChatMessage]] = []
        self._model = model

    @property
    def model_id(self) -> str:
        return self._model

    async def chat_completion_stream(
        self, messages: list[ChatMessage], max_tokens: int = 4096,
    ) -> AsyncIterator[StreamEvent]:
        self.stream_calls.append(list(messages))
        for i, delta in enumerate(self.deltas):
            if self.fail_after is not None and i == self.fail_after:
                raise ConnectionError("Simulated stream failure")
            yield StreamEvent(type="text_delta", text=delta)
        if self.fail_after is not None and self.fail_after >= len(self.deltas):
            raise ConnectionError("Simulated stream failure")
        yield StreamEvent(type="message_end", stop_reason="stop")

    async def complete(self, messages: list[ChatMessage], max_tokens: int = 4096) -> str:
        self.complete_calls.append(list(messages))
        return self.completions.pop(0) if self.completions else ""


class RecordingSink:
    """Stands in for TerminalSink; records everything the driver asks for."""

    def __init__(self) -> None:
        self.commands: list[RenderCommand] = []
        self.raw: list[str] = []
        self.events: list[Any] = []
        self.closed = 0

    async def execute(self, command: RenderCommand) -> None:
        self.commands.append(command)
        self.events.append(command)

    def write_raw(self, text: str) -> None:
        self.raw.append(text)
        self.events.append(("raw", text))

    async def close(self) -> None:
        self.closed += 1


@pytest.fixture
def terminal() -> tuple[Console, StringIO]:
    """A terminal-like console writing into a buffer."""
    buf = StringIO()
    return Console(file=buf, force_terminal=True, width=80), buf


@pytest.fixture
def plain_console() -> tuple[Console, StringIO]:
    """A non-terminal console (no colour, no indicator)."""
    buf = StringIO()
    return Console(file=buf, width=80), buf


@pytest.fixture
def scripted_provider() -> type[ScriptedProvider]:
    return ScriptedProvider


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
