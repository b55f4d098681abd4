"""Unit tests for running a built workflow.

The reference workflow must take the same path for the same decision results,
every time it is run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from decisive_flow.builder import WorkflowBuilder
from decisive_flow.engine.trace import LoggingTraceObserver, RecordingTraceObserver
from decisive_flow.errors import BindingError, ExecutionError
from decisive_flow.graph.outcome_graph import OutcomeGraph
from decisive_flow.graph.outcomes import DecisionOutcome
from decisive_flow.handlers.registry import HandlerRegistry
from decisive_flow.parameters import ParameterStore
from decisive_flow.workflow import Workflow


@pytest.mark.parametrize(
    ("a", "b", "g", "expected", "path"),
    [
        (True, True, False, "X", ["A", "B", "C", "D"]),
        (True, False, False, "Y", ["A", "B", "E"]),
        (False, False, True, "Y", ["A", "G", "E"]),
        (False, False, False, "Z", ["A", "G", "F"]),
    ],
)
def test_reference_workflow_paths(
    reference_builder: WorkflowBuilder,
    calls: list[str],
    a: bool,
    b: bool,
    g: bool,
    expected: str,
    path: list[str],
) -> None:
    workflow = reference_builder.build(a, b, g)

    assert workflow.entry_node_id == "A"
    assert workflow.run() == expected
    assert calls == path


def test_run_is_repeatable(reference_builder: WorkflowBuilder, calls: list[str]) -> None:
    workflow = reference_builder.build(True, True, False)

    first = workflow.run()
    second = workflow.run()

    assert first == second == "X"
    assert calls == ["A", "B", "C", "D"] * 2


def test_recording_observer_reports_each_step(reference_builder: WorkflowBuilder) -> None:
    workflow = reference_builder.build(True, True, False)
    observer = RecordingTraceObserver()

    workflow.run(observer)

    assert [step.kind for step in observer.steps] == [
        "start",
        "decision",
        "decision",
        "action",
        "final",
    ]
    assert observer.path == ["A", "B", "C", "D"]
    assert observer.steps[1].outcome is True
    assert observer.steps[1].next_id == "B"
    assert observer.steps[3].next_id == "D"
    assert "X" in (observer.steps[-1].result or "")


def test_observer_does_not_change_the_result(reference_builder: WorkflowBuilder) -> None:
    workflow = reference_builder.build(False, False, True)

    assert workflow.run() == workflow.run(RecordingTraceObserver())


def test_logging_observer_emits_trace_records(
    reference_builder: WorkflowBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    workflow = reference_builder.build(False, False, False)

    with caplog.at_level(logging.INFO, logger="decisive_flow.trace"):
        workflow.run(LoggingTraceObserver())

    messages = [r.getMessage() for r in caplog.records if r.name == "decisive_flow.trace"]
    assert messages[0] == "Start node: A"
    assert any(m.startswith("Decision node: G") and "<False>" in m for m in messages)
    assert messages[-1].startswith("End node: F")


def test_handler_failure_is_wrapped_with_node_context() -> None:
    def decide() -> bool:
        raise RuntimeError("boom")

    def finish() -> str:
        return "done"

    registry = HandlerRegistry()
    registry.register_decision("A", decide)
    registry.register_final("B", finish)
    registry.register_final("C", finish)
    workflow = (
        WorkflowBuilder(registry)
        .add_decision_node("A").true_outcome("B").false_outcome("C").commit()
    ).build()

    with pytest.raises(ExecutionError) as excinfo:
        workflow.run()

    assert excinfo.value.node_id == "A"
    assert "decide" in excinfo.value.handler_name
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_decision_returning_non_bool_fails_at_runtime() -> None:
    def decide() -> bool:
        return "yes"  # type: ignore[return-value]

    def finish() -> str:
        return "done"

    registry = HandlerRegistry()
    registry.register_decision("A", decide)
    registry.register_final("B", finish)
    registry.register_final("C", finish)
    workflow = (
        WorkflowBuilder(registry)
        .add_decision_node("A").true_outcome("B").false_outcome("C").commit()
    ).build()

    with pytest.raises(ExecutionError, match="expected bool"):
        workflow.run()


def test_bound_parameters_are_passed_by_index() -> None:
    seen: list[tuple[object, ...]] = []

    def decide(second: str, first: int) -> bool:
        seen.append((second, first))
        return first == 1

    def record(first: int) -> None:
        seen.append((first,))

    def finish() -> str:
        return "done"

    registry = HandlerRegistry()
    registry.register_decision("A", decide, params=(1, 0))
    registry.register_action("B", record, params=(0,))
    registry.register_final("C", finish)
    registry.register_final("D", finish)
    workflow = (
        WorkflowBuilder(registry)
        .add_decision_node("A").true_outcome("B").false_outcome("D").commit()
        .add_action_node("B").outcome("C").commit()
    ).build(1, "two")

    assert workflow.run() == "done"
    assert seen == [("two", 1), (1,)]


def test_to_json_describes_the_workflow(reference_builder: WorkflowBuilder) -> None:
    described = reference_builder.build(True, True, True).to_json()

    assert described["entry_node_id"] == "A"
    assert described["parameter_count"] == 3
    handlers = described["handlers"]
    assert isinstance(handlers, dict)
    assert handlers["C"]["kind"] == "action"
    assert handlers["G"]["params"] == [2]
    graph = described["graph"]
    assert isinstance(graph, dict)
    assert graph["terminals"] == ["D", "E", "F"]


def _branch_registry(decide: Callable[[], bool]) -> HandlerRegistry:
    def to_b() -> str:
        return "B"

    def to_c() -> str:
        return "C"

    registry = HandlerRegistry()
    registry.register_decision("A", decide)
    registry.register_final("B", to_b)
    registry.register_final("C", to_c)
    return registry


def test_from_graph_is_isolated_from_later_graph_changes() -> None:
    def always() -> bool:
        return True

    graph = OutcomeGraph()
    graph.put("A", DecisionOutcome("B", "C"))
    workflow = Workflow.from_graph(graph, _branch_registry(always), ParameterStore(()))
    assert workflow.run() == "B"

    graph.put("A", DecisionOutcome("C", "B"))

    assert workflow.run() == "B"
    assert workflow.graph.get("A") == DecisionOutcome("B", "C")


def test_workflow_error_from_handler_propagates_unchanged() -> None:
    original = BindingError("nested workflow is misconfigured", node_id="inner")

    def decide() -> bool:
        raise original

    workflow = (
        WorkflowBuilder(_branch_registry(decide))
        .add_decision_node("A").true_outcome("B").false_outcome("C").commit()
    ).build()

    with pytest.raises(BindingError) as excinfo:
        workflow.run()

    assert excinfo.value is original
    assert excinfo.value.node_id == "inner"
