"""Base provider with shared retry logic."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from termchat.types.providers import ChatMessage, StreamEvent

logger = logging.getLogger(__name__)

# Rate limits and server overload are worth retrying.
_RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 529})
_MAX_RETRIES: int = 3
_BACKOFF_BASE: float = 1.0  # seconds; doubled each retry


def _is_retryable(exc: BaseException) -> bool:
    """Return True when *exc* represents a transient error worth retrying."""
    if type(exc).__name__ in {"RateLimitError", "APITimeoutError", "APIConnectionError"}:
        return True
    status_code: int | None = getattr(exc, "status_code", None)
    return status_code is not None and status_code in _RETRYABLE_STATUS_CODES


class BaseProvider(ABC):
    """Abstract base class for provider adapters.

    Sub-classes implement :meth:`chat_completion_stream` and :meth:`complete`.

    Parameters
    ----------
    model:
        The model identifier string (e.g. ``"gpt-4o"``).
    """

    def __init__(self, model: str) -> None:
        self._model = model

    @property
    def model_id(self) -> str:
        """The model identifier passed at construction time."""
        return self._model

    @abstractmethod
    def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        max_tokens: int = 4096,
    ) -> AsyncIterator[StreamEvent]:
        """Stream a reply as :class:`StreamEvent` objects.

        Yields ``text_delta`` events in arrival order and a final
        ``message_end`` event. Failures are raised from the iterator.
        """
        ...

    @abstractmethod
    async def complete(self, messages: list[ChatMessage], max_tokens: int = 4096) -> str:
        """Run a single non-streaming completion and return its text."""
        ...

    async def _retry_with_backoff(
        self,
        coro_fn: Any,
        /,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Call *coro_fn* with exponential back-off on transient errors.

        Up to :data:`_MAX_RETRIES` additional attempts are made when the
        raised exception is identified as retryable by :func:`_is_retryable`.
        The delay doubles after each failure, starting at :data:`_BACKOFF_BASE`
        seconds.

        Raises
        ------
        Exception
            Re-raises the last exception when all retries are exhausted.
        """
        delay = _BACKOFF_BASE
        for attempt in range(1, _MAX_RETRIES + 2):  # initial attempt + retries
            try:
                return await coro_fn(*args, **kwargs)
            except Exception as exc:
                if not _is_retryable(exc) or attempt > _MAX_RETRIES:
                    raise
                logger.warning(
                    "Transient error on attempt %d/%d (%s). Retrying in %.1fs.",
                    attempt,
                    _MAX_RETRIES + 1,
                    type(exc).__name__,
                    delay,
                )
                await asyncio.sleep(delay)
                delay *= 2.0
        raise RuntimeError("Unexpected state in _retry_with_backoff")  # pragma: no cover
