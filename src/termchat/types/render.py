"""Render command and block-state types for the reflow engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BlockMode(Enum):
    """Which multi-line markdown block, if any, is currently open."""

    NONE = "none"
    CODE = "code"
    LIST = "list"
    TABLE = "table"


class BlankLinePolicy(Enum):
    """What the reflow engine does with empty lines."""

    PRESERVE_IN_CODE = "preserve_in_code"  # Keep blank lines inside fenced code
    DROP = "drop"  # Swallow every blank line


@dataclass(frozen=True, slots=True)
class Render:
    """Render a markdown unit to the terminal."""

    text: str


@dataclass(frozen=True, slots=True)
class StartIndicator:
    """Start the loading indicator."""


@dataclass(frozen=True, slots=True)
class StopIndicator:
    """Stop the loading indicator and clear its region."""


RenderCommand = Render | StartIndicator | StopIndicator
