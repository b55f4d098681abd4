from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from decisive_flow.errors import ExecutionError, WorkflowError
from decisive_flow.graph.outcome_graph import OutcomeGraph
from decisive_flow.graph.outcomes import ActionOutcome, DecisionOutcome, NodeId
from decisive_flow.handlers.registry import HandlerBinding, HandlerKind
from decisive_flow.parameters import ParameterStore

from .trace import TraceObserver

logger = logging.getLogger(__name__)


class ExecutionEngine:
    """Walks a validated graph from its entry node to a terminal node.

    The node kind is derived from graph membership at each step: a decision
    or action outcome in the graph, or no entry at all for a terminal node.
    The engine trusts the validator to have rejected cycles; it has no step
    limit of its own.
    """

    def __init__(
        self,
        graph: OutcomeGraph,
        bindings: Mapping[NodeId, HandlerBinding],
        parameters: ParameterStore,
    ) -> None:
        self._graph = graph
        self._bindings = bindings
        self._parameters = parameters

    def run(self, entry_node_id: NodeId, observer: TraceObserver | None = None) -> Any:
        node_id = entry_node_id
        if observer is not None:
            observer.on_start(node_id)

        while True:
            outcome = self._graph.get(node_id)
            if isinstance(outcome, DecisionOutcome):
                binding = self._binding(node_id, HandlerKind.DECISION)
                decided = self._invoke(node_id, binding)
                if not isinstance(decided, bool):
                    raise ExecutionError(
                        f"Decision handler '{binding.name}' for node '{node_id}' returned "
                        f"{type(decided).__name__}, expected bool.",
                        node_id=node_id,
                        handler_name=binding.name,
                    )
                next_id = outcome.true_next if decided else outcome.false_next
                logger.debug(
                    "Decision node",
                    extra={"node_id": node_id, "outcome": decided, "next_id": next_id},
                )
                if observer is not None:
                    observer.on_decision(node_id, binding.name, decided, next_id)
                node_id = next_id
            elif isinstance(outcome, ActionOutcome):
                binding = self._binding(node_id, HandlerKind.ACTION)
                self._invoke(node_id, binding)
                logger.debug("Action node", extra={"node_id": node_id, "next_id": outcome.next})
                if observer is not None:
                    observer.on_action(node_id, binding.name, outcome.next)
                node_id = outcome.next
            else:
                binding = self._binding(node_id, HandlerKind.FINAL)
                result = self._invoke(node_id, binding)
                logger.debug("End node", extra={"node_id": node_id, "result": repr(result)})
                if observer is not None:
                    observer.on_final(node_id, binding.name, result)
                return result

    def _binding(self, node_id: NodeId, kind: HandlerKind) -> HandlerBinding:
        binding = self._bindings.get(node_id)
        if binding is None or binding.kind is not kind:
            # Unreachable for a validated workflow.
            raise ExecutionError(
                f"Could not find a {kind.value} handler for node ID '{node_id}'.",
                node_id=node_id,
                handler_name="<missing>",
            )
        return binding

    def _invoke(self, node_id: NodeId, binding: HandlerBinding) -> Any:
        """Call a handler with its bound parameters.

        Failures are wrapped in `ExecutionError` naming the node and handler.
        A `WorkflowError` raised by the handler (for example from a nested
        workflow run) already carries its own context and propagates unchanged.
        """

        args = self._parameters.gather(binding.param_indices)
        try:
            return binding.handler(*args)
        except WorkflowError:
            raise
        except Exception as exc:
            raise ExecutionError(
                f"Handler '{binding.name}' for node '{node_id}' raised "
                f"{type(exc).__name__}: {exc}",
                node_id=node_id,
                handler_name=binding.name,
            ) from exc
