"""Stateless line classifiers used by the reflow engine.

Each predicate looks at one complete line (no trailing newline) and is safe
to call on an empty string.
"""

from __future__ import annotations

import re

_LIST_ITEM_RE = re.compile(r"^\s*(?:\d+[.:)]|[*+-])\s+")
_FENCE_TOKENS = ("```", "~~~")


def fence_token(line: str) -> str | None:
    """Return the fence token (```` ``` ```` or ``~~~``) opening *line*, if any."""
    stripped = line.lstrip()
    for token in _FENCE_TOKENS:
        if stripped.startswith(token):
            return token
    return None


def is_code_fence_marker(line: str) -> bool:
    """True when *line* opens or closes a fenced code block."""
    return fence_token(line) is not None


def is_list_item(line: str) -> bool:
    """True for ``1. x``, ``2) x``, ``3: x``, ``- x``, ``* x`` and ``+ x``."""
    return _LIST_ITEM_RE.match(line) is not None


def is_continuation(line: str) -> bool:
    """True when *line* is indented (extends an open list item)."""
    return line[:1].isspace()


def is_table_row(line: str) -> bool:
    """True when *line*, trimmed, is wrapped in pipes."""
    stripped = line.strip()
    return len(stripped) >= 2 and stripped.startswith("|") and stripped.endswith("|")
