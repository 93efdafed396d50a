"""Exception types raised by termchat."""

from __future__ import annotations


class TermchatError(Exception):
    """Base class for all termchat errors."""


class ConfigError(TermchatError):
    """Raised when configuration cannot be loaded or is incomplete."""


class ConversationError(TermchatError):
    """Raised when a saved conversation cannot be read or written."""


class AttachmentError(TermchatError):
    """Raised when a file cannot be attached to a message."""


class StreamError(TermchatError):
    """Raised when a response stream fails part-way through.

    ``text`` holds whatever reply text arrived before the failure.
    """

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text
