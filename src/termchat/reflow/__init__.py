"""Incremental markdown reflow for streamed replies."""

from termchat.reflow.classify import (
    fence_token,
    is_code_fence_marker,
    is_continuation,
    is_list_item,
    is_table_row,
)
from termchat.reflow.engine import ReflowEngine

__all__ = [
    "ReflowEngine",
    "fence_token",
    "is_code_fence_marker",
    "is_continuation",
    "is_list_item",
    "is_table_row",
]
