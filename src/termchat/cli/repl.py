"""Interactive read-eval-print loop for termchat."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from rich.console import Console

from termchat.core.attachments import attach_file
from termchat.core.chat import ChatSession
from termchat.errors import TermchatError
from termchat.types.config import ReflowConfig
from termchat.ui.streaming import StreamDriver
from termchat.ui.terminal import StatusPrinter, TerminalSink

logger = logging.getLogger(__name__)

EXIT_WORDS = frozenset({"q", "exit", "quit", "e", "\\q", "\\quit"})
DONE_MARKERS = ("\\done", "\\d", "/d")

COMMANDS = {
    "\\save": "Save the conversation (\\save [name])",
    "\\load": "Load a saved conversation",
    "\\list": "List saved conversations",
    "\\summarize": "Replace the history with a summary",
    "\\img": "Attach an image (\\img <file>)",
    "\\analyze": "Have an image described for later context (\\analyze <file>)",
    "\\attach": "Insert a file into the message (\\attach <file>)",
    "\\help": "Show this help",
}

LineReader = Callable[[str], Awaitable[str]]


async def _stdin_line(prompt: str) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: input(prompt))


class Repl:
    """Read a multi-line message, stream the reply, repeat.

    A message ends after two blank lines or a ``\\done``/``\\d``/``/d``
    marker (alone or at the end of a line). Lines starting with a known
    backslash command run that command instead of joining the message.
    """

    def __init__(
        self,
        session: ChatSession,
        *,
        format_output: bool = False,
        reflow: ReflowConfig | None = None,
        console: Console | None = None,
        read_line: LineReader | None = None,
    ) -> None:
        self._session = session
        self._console = console or Console()
        self._printer = StatusPrinter(self._console)
        self._read_line = read_line or _stdin_line
        reflow = reflow or ReflowConfig()
        self._sink = TerminalSink(self._console, indicator_interval=reflow.indicator_interval)
        self._driver = StreamDriver(
            self._sink, reflow=format_output, blank_lines=reflow.blank_lines,
        )
        self._eof = False

    # -- Main loop -------------------------------------------------------------

    async def run(self) -> None:
        """Main REPL loop."""
        while not self._eof:
            try:
                text = await self._read_message()
            except EOFError:
                self._printer.plain()
                break
            except KeyboardInterrupt:
                self._printer.plain()
                continue

            if text is None:
                break
            if not text:
                continue
            await self._run_turn(text)

    async def _run_turn(self, text: str) -> None:
        self._printer.plain()
        self._printer.label("Assistant")
        try:
            await self._session.send(text, self._driver)
        except TermchatError as exc:
            self._printer.error(f"Stream error: {exc}")
        except Exception as exc:
            logger.debug("Turn failed", exc_info=True)
            self._printer.error(f"Request failed: {exc}")
        self._printer.plain()

    # -- Input -----------------------------------------------------------------

    async def _read_message(self) -> str | None:
        """Collect one message. Returns None when the user asked to exit."""
        lines: list[str] = []
        blank_count = 0
        prompt = "Message: "

        while True:
            try:
                line = await self._read_line(prompt)
            except EOFError:
                if not lines:
                    raise
                self._eof = True
                break
            prompt = ""
            line = line.rstrip("\r\n")

            if not line:
                blank_count += 1
                if blank_count >= 2:
                    break
                continue
            blank_count = 0

            if line.lower() in DONE_MARKERS:
                break
            if line.startswith("\\") and await self._handle_command(line, lines):
                continue

            marker = next((m for m in DONE_MARKERS if line.endswith(m)), None)
            if marker is not None:
                lines.append(line[: -len(marker)])
                break
            if not lines and line.lower() in EXIT_WORDS:
                return None
            lines.append(line)

        return " ".join(lines).strip()

    # -- Command dispatch ------------------------------------------------------

    async def _handle_command(self, line: str, lines: list[str]) -> bool:
        """Run a backslash command. Returns False if *line* is not a command."""
        parts = line.split()
        base = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        if base not in COMMANDS:
            return False
        try:
            match base:
                case "\\save":
                    path = await self._session.save(arg or None)
                    self._printer.success(f"Conversation saved to {path}")
                case "\\load":
                    await self._handle_load()
                case "\\list":
                    self._handle_list()
                case "\\summarize":
                    await self._session.summarize()
                    self._printer.success("Conversation summarized and reset.")
                case "\\img":
                    if not arg:
                        self._printer.error("Please provide a filename for the image.")
                        return True
                    self._session.attach_image(arg)
                    self._printer.info(f"Image {arg} included as base64.")
                case "\\analyze":
                    if not arg:
                        self._printer.error("Please provide a filename for the image to analyze.")
                        return True
                    analysis = await self._session.analyze_image(arg)
                    self._printer.info(f"Analysis: {analysis}")
                case "\\attach":
                    if not arg:
                        self._printer.error("Please provide a filename to attach.")
                        return True
                    lines.append(attach_file(arg))
                    self._printer.info(f"Attached {arg}.")
                case "\\help":
                    self._handle_help()
        except TermchatError as exc:
            self._printer.error(str(exc))
        except Exception as exc:
            logger.debug("Command %s failed", base, exc_info=True)
            self._printer.error(f"{base} failed: {exc}")
        return True

    def _handle_list(self) -> None:
        names = self._session.store.list_names()
        if not names:
            self._printer.info("No saved conversations.")
            return
        self._printer.plain("Saved conversations:")
        for name in names:
            self._printer.plain(name)

    async def _handle_load(self) -> None:
        names = self._session.store.list_names()
        if not names:
            self._printer.info("No saved conversations.")
            return
        self._printer.plain("Select a conversation to load:")
        for i, name in enumerate(names, start=1):
            self._printer.plain(f"{i}: {name}")

        choice = (await self._read_line("Enter the number of the conversation to load: ")).strip()
        if not choice.isdigit() or not 1 <= int(choice) <= len(names):
            self._printer.error("Invalid choice. Please enter a valid number.")
            return
        name = names[int(choice) - 1]
        self._session.load(name)
        self._printer.success(f"Conversation loaded from {self._session.store.path_for(name)}")

    def _handle_help(self) -> None:
        for name, desc in COMMANDS.items():
            self._printer.plain(f"  {name:<12} {desc}")
        self._printer.plain("  End a message with two blank lines or \\done (\\d, /d).")
        self._printer.plain("  Type q, exit or quit on an empty message to leave.")
