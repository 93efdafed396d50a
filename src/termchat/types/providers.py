"""Provider adapter protocol and stream event types."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import AsyncIterator
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class StreamEvent:
    """A single event from a streaming provider response."""

    type: str  # "text_delta", "message_end"
    text: str | None = None
    stop_reason: str | None = None
    usage: dict[str, int] | None = None


@dataclass(slots=True)
class ChatMessage:
    """A message in the conversation history."""

    role: str  # "user", "assistant", "system"
    content: str | list[dict[str, Any]] = ""

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChatMessage:
        return cls(role=data["role"], content=data.get("content", ""))


@runtime_checkable
class ProviderAdapter(Protocol):
    """Protocol that all provider adapters must implement."""

    def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        max_tokens: int,
    ) -> AsyncIterator[StreamEvent]:
        """Stream a chat completion as StreamEvent objects."""
        ...

    async def complete(self, messages: list[ChatMessage], max_tokens: int) -> str:
        """Run a non-streaming completion and return the reply text."""
        ...

    @property
    def model_id(self) -> str:
        """The model identifier being used."""
        ...
