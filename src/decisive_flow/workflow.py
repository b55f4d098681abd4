from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from decisive_flow.engine.executor import ExecutionEngine
from decisive_flow.engine.trace import TraceObserver
from decisive_flow.graph.outcome_graph import OutcomeGraph
from decisive_flow.graph.outcomes import NodeId
from decisive_flow.handlers.registry import HandlerBinding, HandlerRegistry
from decisive_flow.parameters import ParameterStore
from decisive_flow.validation.validator import GraphValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Workflow:
    """A validated, immutable workflow.

    Obtain one from :class:`decisive_flow.builder.WorkflowBuilder` (or
    :meth:`from_graph`); both run the validator first. `run()` can be called
    any number of times and replays the same path for the same handler
    results.
    """

    graph: OutcomeGraph
    parameters: ParameterStore
    bindings: Mapping[NodeId, HandlerBinding]
    entry_node_id: NodeId
    result_type: type | None = None

    @classmethod
    def from_graph(
        cls,
        graph: OutcomeGraph,
        registry: HandlerRegistry,
        parameters: ParameterStore,
        result_type: type | None = None,
    ) -> Workflow:
        """Validate a private copy of `graph` and wrap it.

        The caller keeps ownership of `graph`; later changes to it do not reach
        the returned workflow.
        """

        graph = graph.copy()
        report = GraphValidator(graph, registry, parameters, result_type).validate()
        return cls(
            graph=graph,
            parameters=parameters,
            bindings=report.bindings,
            entry_node_id=report.entry_node_id,
            result_type=result_type,
        )

    def run(self, observer: TraceObserver | None = None) -> Any:
        logger.debug("Workflow run started", extra={"entry_node_id": self.entry_node_id})
        engine = ExecutionEngine(self.graph, self.bindings, self.parameters)
        return engine.run(self.entry_node_id, observer)

    def to_json(self) -> dict[str, object]:
        return {
            "entry_node_id": self.entry_node_id,
            "graph": self.graph.to_json(),
            "handlers": {
                node_id: {
                    "handler": binding.name,
                    "kind": binding.kind.value,
                    "params": list(binding.param_indices),
                }
                for node_id, binding in sorted(self.bindings.items())
            },
            "parameter_count": len(self.parameters),
        }
