"""Conversation persistence as indented JSON arrays."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from termchat.errors import ConversationError
from termchat.types.providers import ChatMessage

logger = logging.getLogger(__name__)

_UNSAFE_NAME_RE = re.compile(r"[^\w.-]+")


def sanitize_name(name: str) -> str:
    """Turn a free-form title into a file-safe conversation name."""
    cleaned = _UNSAFE_NAME_RE.sub("_", name.strip().strip("\"'`"))
    cleaned = cleaned.strip("._")
    if not cleaned:
        raise ConversationError(f"Invalid conversation name: {name!r}")
    return cleaned[:80]


class ConversationStore:
    """Saved conversations, one ``<name>.json`` file each."""

    def __init__(self, directory: str | Path = "./conversations") -> None:
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, name: str) -> Path:
        return self._dir / f"{sanitize_name(name)}.json"

    def list_names(self) -> list[str]:
        """Names of saved conversations, sorted."""
        if not self._dir.is_dir():
            return []
        return sorted(p.stem for p in self._dir.glob("*.json"))

    def save(self, name: str, messages: list[ChatMessage]) -> Path:
        """Write *messages* to ``<name>.json`` and return the path."""
        path = self.path_for(name)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps([m.to_dict() for m in messages], indent=2, ensure_ascii=False) + "\n",
            )
        except OSError as exc:
            raise ConversationError(f"Cannot save conversation to {path}: {exc}") from exc
        logger.info("Saved %d messages to %s", len(messages), path)
        return path

    def load(self, name: str) -> list[ChatMessage]:
        """Read the conversation called *name*."""
        path = self.path_for(name)
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise ConversationError(f"Cannot load conversation {path}: {exc}") from exc
        if not isinstance(data, list):
            raise ConversationError(f"Conversation {path} is not a JSON array")
        try:
            return [ChatMessage.from_dict(entry) for entry in data]
        except (KeyError, TypeError, AttributeError) as exc:
            raise ConversationError(f"Malformed message in {path}: {exc}") from exc
