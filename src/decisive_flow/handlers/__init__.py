"""Handler registry package initialization."""

from decisive_flow.handlers.registry import (
    HandlerBinding,
    HandlerKind,
    HandlerRegistry,
    action_node,
    decision_node,
    final_node,
)

__all__ = [
    "HandlerBinding",
    "HandlerKind",
    "HandlerRegistry",
    "action_node",
    "decision_node",
    "final_node",
]
