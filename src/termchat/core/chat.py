"""A chat session: conversation history plus the requests made on it."""

from __future__ import annotations

import logging
from pathlib import Path

from termchat.core.attachments import image_message, image_parts
from termchat.core.conversation import ConversationStore, sanitize_name
from termchat.errors import StreamError
from termchat.types.config import ChatConfig
from termchat.types.providers import ChatMessage, ProviderAdapter
from termchat.ui.streaming import StreamDriver

logger = logging.getLogger(__name__)

TITLE_PROMPT = (
    "Provide a title for this chat conversation. Try to keep it under 50 "
    "characters in length. Include only the title in your response with no "
    'other text before or after the title. Use "_" rather than spaces.'
)
SUMMARY_PROMPT = "Please provide a summary of the conversation so far."
ANALYZE_PROMPT = (
    "Here is an image for your analysis. Describe it thoroughly and in detail "
    "so that you have context for everything in it if it comes up later in "
    "the conversation. The user will not see this description."
)


class ChatSession:
    """Ordered message history for one interactive conversation.

    The history starts with the system prompt (``user_info``) when one is
    configured and is only appended to, except by :meth:`load` and
    :meth:`summarize`, which replace it wholesale.
    """

    def __init__(
        self,
        provider: ProviderAdapter,
        config: ChatConfig,
        store: ConversationStore | None = None,
    ) -> None:
        self._provider = provider
        self._config = config
        self._store = store or ConversationStore(config.conversations_dir)
        self._system = (
            ChatMessage(role="system", content=config.user_info) if config.user_info else None
        )
        self._messages: list[ChatMessage] = [self._system] if self._system else []

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def model_id(self) -> str:
        return self._provider.model_id

    def add_message(self, msg: ChatMessage) -> None:
        self._messages.append(msg)

    async def send(self, text: str, driver: StreamDriver) -> str:
        """Send a user message and stream the reply through *driver*.

        The reply is appended to the history. If the stream fails, whatever
        arrived is kept and the :class:`StreamError` is re-raised.
        """
        self._messages.append(ChatMessage(role="user", content=text))
        stream = self._provider.chat_completion_stream(
            self._messages, max_tokens=self._config.max_tokens,
        )
        try:
            reply = await driver.run(stream)
        except StreamError as exc:
            if exc.text:
                self._messages.append(ChatMessage(role="assistant", content=exc.text))
            raise
        self._messages.append(ChatMessage(role="assistant", content=reply))
        return reply

    async def _ask(self, prompt: ChatMessage) -> str:
        """One-off request on top of the history; the history is not changed."""
        return await self._provider.complete(
            [*self._messages, prompt], max_tokens=self._config.max_tokens,
        )

    async def suggest_title(self) -> str:
        """Ask the model for a file-safe title not already in use."""
        existing = self._store.list_names()
        prompt = TITLE_PROMPT
        if existing:
            prompt += f" Avoid using any of the following titles: {', '.join(existing)}"
        title = await self._ask(ChatMessage(role="user", content=prompt))
        return sanitize_name(title)

    async def save(self, name: str | None = None) -> Path:
        """Save the history, generating a title when *name* is not given."""
        if not name:
            name = await self.suggest_title()
            logger.debug("Generated conversation title %r", name)
        return self._store.save(name, self._messages)

    def load(self, name: str) -> None:
        """Replace the history with the saved conversation *name*."""
        self._messages = self._store.load(name)

    async def summarize(self) -> str:
        """Replace the history with the system prompt plus a model-written summary."""
        summary = await self._ask(ChatMessage(role="system", content=SUMMARY_PROMPT))
        self._messages = [self._system] if self._system else []
        self._messages.append(ChatMessage(role="system", content=summary))
        return summary

    def attach_image(self, path: str | Path) -> None:
        self._messages.append(image_message(path))

    async def analyze_image(self, path: str | Path) -> str:
        """Have the model describe an image and keep the description as context."""
        prompt = ChatMessage(role="user", content=image_parts(path, ANALYZE_PROMPT))
        analysis = await self._ask(prompt)
        self._messages.append(ChatMessage(role="system", content=analysis))
        return analysis
