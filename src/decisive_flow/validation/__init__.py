"""Graph validation package initialization."""

from decisive_flow.validation.validator import GraphValidator, ValidationReport

__all__ = [
    "GraphValidator",
    "ValidationReport",
]
