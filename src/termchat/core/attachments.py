"""Reading files and images into message content."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path
from typing import Any

from termchat.errors import AttachmentError
from termchat.types.providers import ChatMessage

# Binary office formats sent base64-encoded; everything else is read as text.
BINARY_DOCUMENT_SUFFIXES = frozenset({".docx", ".xlsx"})
BINARY_DOCUMENT_TYPES = frozenset({
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",  # .docx
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",  # .xlsx
})


def _read_bytes(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise AttachmentError(f"Cannot read {path}: {exc}") from exc


def attach_file(path: str | Path) -> str:
    """Return *path* as message text: ``[FILE <base64>]`` for office documents."""
    data = _read_bytes(path)
    mime_type, _ = mimetypes.guess_type(str(path))
    suffix = Path(path).suffix.lower()
    if suffix in BINARY_DOCUMENT_SUFFIXES or mime_type in BINARY_DOCUMENT_TYPES:
        return f"[FILE {base64.b64encode(data).decode('ascii')}]"
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise AttachmentError(f"{path} is not a text file") from exc


def read_image_base64(path: str | Path) -> str:
    return base64.b64encode(_read_bytes(path)).decode("ascii")


def image_parts(path: str | Path, text: str) -> list[dict[str, Any]]:
    """Multi-part content carrying *text* and the image at *path*."""
    encoded = read_image_base64(path)
    return [
        {"type": "text", "text": text},
        {
            "type": "image_url",
            "image_url": {"url": f"data:image/jpeg;base64,{encoded}", "detail": "high"},
        },
    ]


def image_message(path: str | Path, text: str = "Photo attached by the user") -> ChatMessage:
    return ChatMessage(role="user", content=image_parts(path, text))
