"""Test configuration and fixtures.

The reference workflow used throughout:

    A -> (true: B, false: G)
    B -> (true: C, false: E)
    G -> (true: E, false: F)
    C -> D (action)
    finals: D -> X, E -> Y, F -> Z

Decision results are supplied as build parameters: A reads index 0, B reads
index 1 and G reads index 2.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import Enum

import pytest

from decisive_flow.builder import WorkflowBuilder
from decisive_flow.handlers.registry import HandlerRegistry


class Result(str, Enum):
    X = "X"
    Y = "Y"
    Z = "Z"


def _decision(node_id: str, calls: list[str]) -> Callable[[bool], bool]:
    def decide(value: bool) -> bool:
        calls.append(node_id)
        return value

    return decide


def _action(node_id: str, calls: list[str]) -> Callable[[], None]:
    def act() -> None:
        calls.append(node_id)

    return act


def _final(node_id: str, result: Result, calls: list[str]) -> Callable[[], Result]:
    def finish() -> Result:
        calls.append(node_id)
        return result

    return finish


@pytest.fixture
def calls() -> list[str]:
    """Node ids in the order their handlers were invoked."""
    return []


@pytest.fixture
def reference_registry(calls: list[str]) -> HandlerRegistry:
    """Provide handlers for every node of the reference workflow."""
    registry = HandlerRegistry()
    registry.register_decision("A", _decision("A", calls), params=(0,))
    registry.register_decision("B", _decision("B", calls), params=(1,))
    registry.register_decision("G", _decision("G", calls), params=(2,))
    registry.register_action("C", _action("C", calls))
    registry.register_final("D", _final("D", Result.X, calls))
    registry.register_final("E", _final("E", Result.Y, calls))
    registry.register_final("F", _final("F", Result.Z, calls))
    return registry


@pytest.fixture
def reference_builder(reference_registry: HandlerRegistry) -> WorkflowBuilder:
    """Provide a builder with the reference graph committed but not built."""
    return (
        WorkflowBuilder(reference_registry, result_type=Result)
        .add_decision_node("A").true_outcome("B").false_outcome("G").commit()
        .add_decision_node("B").true_outcome("C").false_outcome("E").commit()
        .add_decision_node("G").true_outcome("E").false_outcome("F").commit()
        .add_action_node("C").outcome("D").commit()
    )


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Drop handlers added by `configure_logging` once the test finishes."""
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)
