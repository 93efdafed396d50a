"""Configuration types for termchat."""

from __future__ import annotations

from dataclasses import dataclass, field

from termchat.types.render import BlankLinePolicy


@dataclass(frozen=True, slots=True)
class ReflowConfig:
    """Settings for formatted (reflowed) output."""

    blank_lines: BlankLinePolicy = BlankLinePolicy.PRESERVE_IN_CODE
    indicator_interval: float = 0.5


@dataclass(slots=True)
class ChatConfig:
    """Resolved configuration for one termchat process."""

    api_key: str
    model: str = "gpt-4o"
    base_url: str | None = None
    user_info: str = ""
    max_tokens: int = 4096
    conversations_dir: str = "./conversations"
    reflow: ReflowConfig = field(default_factory=ReflowConfig)
