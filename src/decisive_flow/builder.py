"""Fluent construction of workflows.

    workflow = (
        WorkflowBuilder(registry, result_type=Result)
        .add_decision_node("A").true_outcome("B").false_outcome("G").commit()
        .add_decision_node("B").true_outcome("C").false_outcome("E").commit()
        .add_decision_node("G").true_outcome("E").false_outcome("F").commit()
        .add_action_node("C").outcome("D").commit()
        .build("a", 5)
    )

Terminal nodes are never added explicitly; they exist as successor references
with a final handler bound to them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from decisive_flow.errors import DuplicateNodeError, IncompleteOutcomeError, StructuralError
from decisive_flow.graph.outcome_graph import OutcomeGraph
from decisive_flow.graph.outcomes import ActionOutcome, DecisionOutcome, NodeId, Outcome
from decisive_flow.handlers.registry import HandlerRegistry
from decisive_flow.parameters import ParameterStore
from decisive_flow.workflow import Workflow

logger = logging.getLogger(__name__)


class DecisionNodeBuilder:
    def __init__(self, parent: WorkflowBuilder, node_id: NodeId) -> None:
        self._parent = parent
        self._node_id = node_id
        self._true_next: NodeId | None = None
        self._false_next: NodeId | None = None

    def true_outcome(self, node_id: NodeId) -> DecisionNodeBuilder:
        self._true_next = node_id
        return self

    def false_outcome(self, node_id: NodeId) -> DecisionNodeBuilder:
        self._false_next = node_id
        return self

    def commit(self) -> WorkflowBuilder:
        return self._parent._commit(
            self,
            self._node_id,
            lambda: DecisionOutcome(self._true_next, self._false_next),  # type: ignore[arg-type]
        )


class ActionNodeBuilder:
    def __init__(self, parent: WorkflowBuilder, node_id: NodeId) -> None:
        self._parent = parent
        self._node_id = node_id
        self._next: NodeId | None = None

    def outcome(self, node_id: NodeId) -> ActionNodeBuilder:
        self._next = node_id
        return self

    def commit(self) -> WorkflowBuilder:
        return self._parent._commit(
            self,
            self._node_id,
            lambda: ActionOutcome(self._next),  # type: ignore[arg-type]
        )


class WorkflowBuilder:
    """Accumulates node definitions, one committed node at a time."""

    def __init__(self, registry: HandlerRegistry, result_type: type | None = None) -> None:
        self._registry = registry
        self._result_type = result_type
        self._graph = OutcomeGraph()
        self._pending: DecisionNodeBuilder | ActionNodeBuilder | None = None

    @classmethod
    def for_host(cls, host: object, result_type: type | None = None) -> WorkflowBuilder:
        """Builder whose handlers are the decorated methods of `host`."""

        return cls(HandlerRegistry.from_host(host), result_type=result_type)

    def add_decision_node(self, node_id: NodeId) -> DecisionNodeBuilder:
        node = DecisionNodeBuilder(self, self._start(node_id))
        self._pending = node
        return node

    def add_action_node(self, node_id: NodeId) -> ActionNodeBuilder:
        node = ActionNodeBuilder(self, self._start(node_id))
        self._pending = node
        return node

    def build(self, *parameters: object) -> Workflow:
        self._require_nothing_pending()
        store = ParameterStore(tuple(parameters))
        logger.debug(
            "Building workflow",
            extra={"node_count": len(self._graph), "parameter_count": len(store)},
        )
        return Workflow.from_graph(self._graph, self._registry, store, self._result_type)

    def _start(self, node_id: NodeId) -> NodeId:
        self._require_nothing_pending()
        if not isinstance(node_id, str) or not node_id.strip():
            raise StructuralError(f"Node ID must be a non-empty string, got {node_id!r}.")
        return node_id

    def _require_nothing_pending(self) -> None:
        if self._pending is not None:
            raise IncompleteOutcomeError(
                f"Node '{self._pending._node_id}' was never committed; "
                "call commit() before defining the next node.",
                node_id=self._pending._node_id,
            )

    def _commit(
        self,
        node: DecisionNodeBuilder | ActionNodeBuilder,
        node_id: NodeId,
        make_outcome: Callable[[], Outcome],
    ) -> WorkflowBuilder:
        try:
            outcome = make_outcome()
        except IncompleteOutcomeError as exc:
            raise IncompleteOutcomeError(f"Node '{node_id}': {exc}", node_id=node_id) from exc
        if node_id in self._graph:
            # A rejected duplicate is discarded, not left pending.
            if self._pending is node:
                self._pending = None
            raise DuplicateNodeError(
                f"Node ID '{node_id}' is already defined in the graph.", node_id=node_id
            )
        self._graph.put(node_id, outcome)
        if self._pending is node:
            self._pending = None
        return self
