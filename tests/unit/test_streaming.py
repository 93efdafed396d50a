"""Tests for termchat.ui.streaming — the stream driver."""

from __future__ import annotations

import pytest

from termchat.errors import StreamError
from termchat.types.providers import StreamEvent
from termchat.types.render import Render, StartIndicator, StopIndicator
from termchat.ui.streaming import StreamDriver
from termchat.ui.terminal import TerminalSink


async def _events(*deltas, fail: Exception | None = None, end: bool = True):
    for delta in deltas:
        yield StreamEvent(type="text_delta", text=delta)
    if fail is not None:
        raise fail
    if end:
        yield StreamEvent(type="message_end", stop_reason="stop")


class TestStreamDriver:
    @pytest.mark.asyncio
    async def test_reflow_commands_in_order(self, recording_sink):
        driver = StreamDriver(recording_sink, reflow=True)
        text = await driver.run(_events("Hello ", "world\n", "- a\n", "- b\n"))
        assert text == "Hello world\n- a\n- b\n"
        assert recording_sink.events == [
            Render("Hello world"),
            StartIndicator(),
            Render("- a\n- b"),
            StopIndicator(),
            ("raw", "\n"),
        ]
        assert recording_sink.closed == 1

    @pytest.mark.asyncio
    async def test_raw_mode_reproduces_deltas(self, recording_sink):
        deltas = ["```py\n", "x = 1", "\n```", "\n| a |\n", "tail"]
        driver = StreamDriver(recording_sink, reflow=False)
        text = await driver.run(_events(*deltas))
        assert recording_sink.commands == []
        assert "".join(recording_sink.raw) == "".join(deltas) + "\n"
        assert text == "".join(deltas)

    @pytest.mark.asyncio
    async def test_error_flushes_and_raises(self, recording_sink):
        driver = StreamDriver(recording_sink, reflow=True)
        with pytest.raises(StreamError) as exc_info:
            await driver.run(_events("- a\n", "- b", fail=ConnectionError("reset")))
        assert exc_info.value.text == "- a\n- b"
        assert "reset" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert recording_sink.commands == [
            StartIndicator(),
            Render("- a\n- b"),
            StopIndicator(),
        ]
        assert recording_sink.closed == 1

    @pytest.mark.asyncio
    async def test_stream_without_end_event(self, recording_sink):
        driver = StreamDriver(recording_sink, reflow=True)
        text = await driver.run(_events("no newline", end=False))
        assert text == "no newline"
        assert recording_sink.commands == [Render("no newline")]

    @pytest.mark.asyncio
    async def test_stops_at_message_end(self, recording_sink):
        pulled = []

        async def events():
            for event in (
                StreamEvent(type="text_delta", text="one\n"),
                StreamEvent(type="message_end"),
                StreamEvent(type="text_delta", text="two\n"),
            ):
                pulled.append(event)
                yield event

        driver = StreamDriver(recording_sink, reflow=True)
        assert await driver.run(events()) == "one\n"
        assert len(pulled) == 2
        assert recording_sink.commands == [Render("one")]

    @pytest.mark.asyncio
    async def test_ignores_empty_and_unknown_events(self, recording_sink):
        async def events():
            yield StreamEvent(type="text_delta", text="")
            yield StreamEvent(type="text_delta", text=None)
            yield StreamEvent(type="ping")
            yield StreamEvent(type="text_delta", text="ok\n")

        driver = StreamDriver(recording_sink, reflow=True)
        assert await driver.run(events()) == "ok\n"
        assert recording_sink.commands == [Render("ok")]

    @pytest.mark.asyncio
    async def test_end_to_end_with_terminal_sink(self, terminal):
        console, buf = terminal
        sink = TerminalSink(console, renderer=lambda t, w: f"<{t}>\n", indicator_interval=10)
        driver = StreamDriver(sink, reflow=True)
        await driver.run(_events("Intro\n| a |\n", "| b |\n", "Outro\n"))
        output = buf.getvalue()
        assert output.index("<Intro>") < output.index("<| a |\n| b |>") < output.index("<Outro>")
        assert not sink.indicator.running

    @pytest.mark.asyncio
    async def test_error_stops_real_indicator(self, terminal):
        console, buf = terminal
        sink = TerminalSink(console, renderer=lambda t, w: f"<{t}>\n", indicator_interval=10)
        driver = StreamDriver(sink, reflow=True)
        with pytest.raises(StreamError):
            await driver.run(_events("```\ncode\n", fail=TimeoutError()))
        assert not sink.indicator.running
        assert "<```\ncode>" in buf.getvalue()
