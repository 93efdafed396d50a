"""termchat — stream chat replies from a language model to the terminal.

Usage:
    from termchat import ReflowEngine, Render

    engine = ReflowEngine()
    for delta in ("- one\n", "- two\n", "done\n"):
        for command in engine.feed(delta):
            ...
    commands = engine.flush()
"""

from termchat.reflow.engine import ReflowEngine
from termchat.types.config import ChatConfig, ReflowConfig
from termchat.types.providers import ChatMessage, StreamEvent
from termchat.types.render import (
    BlankLinePolicy,
    BlockMode,
    Render,
    RenderCommand,
    StartIndicator,
    StopIndicator,
)

__version__ = "0.1.0"

__all__ = [
    "BlankLinePolicy",
    "BlockMode",
    "ChatConfig",
    "ChatMessage",
    "ReflowConfig",
    "ReflowEngine",
    "Render",
    "RenderCommand",
    "StartIndicator",
    "StopIndicator",
    "StreamEvent",
]
