"""OpenAI provider adapter.

Works with OpenAI models and any OpenAI-compatible endpoint (Ollama,
Groq, OpenRouter) by passing a custom ``base_url``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI

from termchat.providers.base import BaseProvider
from termchat.types.providers import ChatMessage, StreamEvent

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseProvider):
    """Provider adapter for OpenAI-compatible chat completion APIs.

    Uses the official ``openai`` SDK with its async streaming interface and
    translates chunks into provider-agnostic :class:`StreamEvent` objects.

    Parameters
    ----------
    api_key:
        OpenAI API key.
    model:
        Model ID to use for completions (default ``"gpt-4o"``).
    base_url:
        Optional custom base URL for OpenAI-compatible endpoints.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
        base_url: str | None = None,
    ) -> None:
        super().__init__(model)
        kwargs: dict[str, Any] = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if base_url is not None:
            kwargs["base_url"] = base_url
        self._client = AsyncOpenAI(**kwargs)

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        max_tokens: int = 4096,
    ) -> AsyncIterator[StreamEvent]:
        """Stream a chat completion, one ``text_delta`` event per content chunk."""
        stream = await self._retry_with_backoff(
            self._client.chat.completions.create,
            model=self._model,
            messages=self._to_openai_messages(messages),
            stream=True,
            stream_options={"include_usage": True},
            **self._token_kwargs(max_tokens),
        )

        final_usage: dict[str, int] | None = None
        stop_reason: str | None = None

        async for chunk in stream:
            # The last chunk carries usage with an empty choices list.
            raw_usage = getattr(chunk, "usage", None)
            if raw_usage is not None:
                final_usage = {
                    "input_tokens": getattr(raw_usage, "prompt_tokens", 0) or 0,
                    "output_tokens": getattr(raw_usage, "completion_tokens", 0) or 0,
                }

            choice = chunk.choices[0] if chunk.choices else None
            if choice is None:
                continue
            if choice.delta and choice.delta.content:
                yield StreamEvent(type="text_delta", text=choice.delta.content)
            if choice.finish_reason:
                stop_reason = choice.finish_reason

        logger.debug("Stream finished (%s, usage=%s)", stop_reason, final_usage)
        yield StreamEvent(type="message_end", stop_reason=stop_reason, usage=final_usage)

    async def complete(self, messages: list[ChatMessage], max_tokens: int = 4096) -> str:
        """Run a non-streaming completion and return the reply text."""
        response = await self._retry_with_backoff(
            self._client.chat.completions.create,
            model=self._model,
            messages=self._to_openai_messages(messages),
            **self._token_kwargs(max_tokens),
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def _token_kwargs(self, max_tokens: int) -> dict[str, Any]:
        # GPT-5+ and reasoning models (o1/o3/o4) use max_completion_tokens.
        model_lower = self._model.lower()
        if any(model_lower.startswith(p) for p in ("gpt-5", "o1", "o3", "o4")):
            return {"max_completion_tokens": max_tokens}
        return {"max_tokens": max_tokens}

    @staticmethod
    def _to_openai_messages(messages: list[ChatMessage]) -> list[dict[str, Any]]:
        return [{"role": m.role, "content": m.content} for m in messages]
