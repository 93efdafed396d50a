"""Provider adapters for termchat."""

from __future__ import annotations

from termchat.providers.base import BaseProvider
from termchat.providers.openai import OpenAIProvider

__all__ = ["BaseProvider", "OpenAIProvider"]
