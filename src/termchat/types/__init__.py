"""Type definitions for termchat."""

from termchat.types.config import ChatConfig, ReflowConfig
from termchat.types.providers import ChatMessage, ProviderAdapter, StreamEvent
from termchat.types.render import (
    BlankLinePolicy,
    BlockMode,
    Render,
    RenderCommand,
    StartIndicator,
    StopIndicator,
)

__all__ = [
    "BlankLinePolicy",
    "BlockMode",
    "ChatConfig",
    "ChatMessage",
    "ProviderAdapter",
    "ReflowConfig",
    "Render",
    "RenderCommand",
    "StartIndicator",
    "StopIndicator",
    "StreamEvent",
]
