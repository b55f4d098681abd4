"""Static validation of an outcome graph against its handler bindings.

Validation runs once, before a workflow is usable, and either accepts the
whole graph or raises the first violation found. Checks run in this order:

1. node universe size (at least one decision and two outcomes)
2. entry-point inference (exactly one node with no incoming edge)
3. handler coverage (bindings and graph nodes agree, kinds included)
4. signature agreement (return types, explicit parameter indices)
5. reachability (depth-first walk from the entry node; cycles rejected)
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from decisive_flow.errors import (
    BindingError,
    CircularGraphError,
    GraphTooSmallError,
    MultipleStartNodesError,
    SignatureError,
    UnreachableNodeError,
)
from decisive_flow.graph.outcome_graph import OutcomeGraph
from decisive_flow.graph.outcomes import NodeId
from decisive_flow.handlers.registry import HandlerBinding, HandlerKind, HandlerRegistry
from decisive_flow.parameters import ParameterStore

logger = logging.getLogger(__name__)

MIN_GRAPH_SIZE = 3

_NONE_TYPE = type(None)


@dataclass(frozen=True, slots=True)
class ValidationReport:
    entry_node_id: NodeId
    node_count: int
    visited: frozenset[NodeId]
    bindings: Mapping[NodeId, HandlerBinding]


def _handler_target(handler: Callable[..., Any]) -> Callable[..., Any]:
    if inspect.isroutine(handler):
        return handler
    # Callable instances: inspect their __call__.
    return getattr(handler, "__call__", handler)


class GraphValidator:
    def __init__(
        self,
        graph: OutcomeGraph,
        registry: HandlerRegistry,
        parameters: ParameterStore,
        result_type: type | None = None,
    ) -> None:
        self._graph = graph
        self._registry = registry
        self._parameters = parameters
        self._result_type = result_type

    def validate(self) -> ValidationReport:
        universe = self._graph.all_referenced_node_ids()
        self._check_size(universe)
        entry = self.infer_entry_node()
        self._check_coverage(universe)
        for binding in self._registry:
            self._check_signature(binding)
            self._check_parameter_range(binding)
        visited = self._walk(entry)

        if len(visited) != len(universe):
            unreachable = sorted(universe - visited)
            raise UnreachableNodeError(
                f"Nodes {unreachable} cannot be reached from start node '{entry}'. "
                "Ensure all nodes are linked to a decision, action or final node.",
                unreachable=unreachable,
            )

        # Every node in the universe is bound once the walk has succeeded.
        bindings: dict[NodeId, HandlerBinding] = {}
        for node_id in universe:
            binding = self._registry.lookup(node_id)
            if binding is not None:
                bindings[node_id] = binding

        logger.info(
            "Workflow graph validated",
            extra={"entry_node_id": entry, "node_count": len(universe)},
        )
        return ValidationReport(
            entry_node_id=entry,
            node_count=len(universe),
            visited=frozenset(visited),
            bindings=MappingProxyType(bindings),
        )

    def _check_size(self, universe: frozenset[NodeId]) -> None:
        logger.debug("Node universe", extra={"node_ids": sorted(universe)})
        if len(universe) < MIN_GRAPH_SIZE:
            raise GraphTooSmallError(
                f"Must have at least {MIN_GRAPH_SIZE} nodes in the graph "
                f"(a decision and two end nodes); found {len(universe)}."
            )

    def infer_entry_node(self) -> NodeId:
        """Return the single graph node that no outcome points at."""

        candidates = {node_id: True for node_id in self._graph}
        for node_id in candidates:
            for _, outcome in self._graph.items():
                if outcome.references(node_id):
                    candidates[node_id] = False
                    break

        remaining = [node_id for node_id, marked in candidates.items() if marked]
        if not remaining:
            raise CircularGraphError(
                "Circular node list identified. Could not determine the start node from the graph."
            )
        if len(remaining) > 1:
            names = sorted(remaining)
            raise MultipleStartNodesError(
                f"More than one start node identified: {names}. "
                "Make sure the graph of node IDs is linked.",
                candidates=names,
            )
        return remaining[0]

    def _check_coverage(self, universe: frozenset[NodeId]) -> None:
        for binding in self._registry:
            for node_id in binding.node_ids:
                if node_id not in universe:
                    raise BindingError(
                        f"Handler '{binding.name}' ({binding.kind.value}) is bound to node ID "
                        f"'{node_id}', which does not exist in the graph.",
                        node_id=node_id,
                    )
                self._check_kind(node_id, binding)

        for node_id in self._graph:
            binding = self._registry.lookup(node_id)
            if binding is None:
                kind = "decision" if self._graph.is_decision(node_id) else "action"
                raise BindingError(
                    f"Node ID '{node_id}' is a {kind} node in the graph but has no {kind} handler.",
                    node_id=node_id,
                )

    def _check_kind(self, node_id: NodeId, binding: HandlerBinding) -> None:
        if self._graph.is_decision(node_id):
            expected = HandlerKind.DECISION
        elif self._graph.is_action(node_id):
            expected = HandlerKind.ACTION
        else:
            expected = HandlerKind.FINAL
        if binding.kind is not expected:
            raise BindingError(
                f"Node ID '{node_id}' is a {expected.value} node in the graph, "
                f"but handler '{binding.name}' is a {binding.kind.value} handler.",
                node_id=node_id,
            )

    def _check_signature(self, binding: HandlerBinding) -> None:
        target = _handler_target(binding.handler)
        node_id = binding.node_ids[0]
        label = f"{binding.kind.value} handler '{binding.name}'"

        try:
            hints = typing.get_type_hints(target)
            signature = inspect.signature(target)
        except (NameError, TypeError, ValueError) as exc:
            raise SignatureError(
                f"Could not resolve the signature of {label}: {exc}", node_id=node_id
            ) from exc

        if "return" not in hints:
            raise SignatureError(f"{label} must declare a return type.", node_id=node_id)
        returns = hints["return"]

        if binding.kind is HandlerKind.DECISION and returns is not bool:
            raise SignatureError(f"{label} must return bool.", node_id=node_id)
        if binding.kind is HandlerKind.ACTION and returns is not _NONE_TYPE:
            raise SignatureError(f"{label} must return None.", node_id=node_id)
        if binding.kind is HandlerKind.FINAL:
            self._check_final_return(returns, label, node_id)

        positional: list[str] = []
        for param in signature.parameters.values():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD, param.KEYWORD_ONLY):
                raise SignatureError(
                    f"{label} parameter '{param.name}' cannot be bound by position.",
                    node_id=node_id,
                )
            positional.append(param.name)

        if binding.kind is HandlerKind.FINAL and positional:
            raise SignatureError(f"{label} must have no parameters.", node_id=node_id)

        if len(positional) != len(binding.param_indices):
            unbound = positional[len(binding.param_indices) :]
            if unbound:
                raise SignatureError(
                    f"{label} parameters {unbound} must be bound to an explicit parameter index.",
                    node_id=node_id,
                )
            raise SignatureError(
                f"{label} binds {len(binding.param_indices)} parameter indices "
                f"but accepts {len(positional)} parameter(s).",
                node_id=node_id,
            )

    def _check_final_return(self, returns: object, label: str, node_id: NodeId) -> None:
        if returns is _NONE_TYPE:
            raise SignatureError(f"{label} must return the workflow result.", node_id=node_id)
        if self._result_type is None:
            return
        if not (isinstance(returns, type) and issubclass(returns, self._result_type)):
            raise SignatureError(
                f"{label} must return {self._result_type.__name__}.", node_id=node_id
            )

    def _check_parameter_range(self, binding: HandlerBinding) -> None:
        for index in binding.param_indices:
            if index >= len(self._parameters):
                raise BindingError(
                    f"Handler '{binding.name}' binds parameter index {index}, but only "
                    f"{len(self._parameters)} parameter(s) were supplied at build time.",
                    node_id=binding.node_ids[0],
                )

    def _walk(self, entry: NodeId) -> set[NodeId]:
        """Depth-first walk returning every node reachable from `entry`.

        `on_stack` holds the current path; meeting one of its nodes again
        means a cycle. `finished` nodes are counted once and not descended
        into again.
        """

        finished: set[NodeId] = set()
        on_stack: set[NodeId] = set()
        path: list[NodeId] = []
        stack: list[tuple[NodeId, Iterator[NodeId]]] = []

        def enter(node_id: NodeId) -> None:
            outcome = self._graph.get(node_id)
            if outcome is None:
                binding = self._registry.lookup(node_id)
                if binding is None or binding.kind is not HandlerKind.FINAL:
                    raise BindingError(
                        f"Terminal node ID '{node_id}' must have a final handler.",
                        node_id=node_id,
                    )
                finished.add(node_id)
                return
            on_stack.add(node_id)
            path.append(node_id)
            stack.append((node_id, iter(outcome.successors())))

        enter(entry)
        while stack:
            node_id, successors = stack[-1]
            next_id = next(successors, None)
            if next_id is None:
                stack.pop()
                path.pop()
                on_stack.discard(node_id)
                finished.add(node_id)
                continue
            if next_id in on_stack:
                cycle = path[path.index(next_id) :] + [next_id]
                raise CircularGraphError(
                    f"Circular path identified: {' -> '.join(cycle)}.",
                    node_id=next_id,
                    path=cycle,
                )
            if next_id not in finished:
                enter(next_id)

        logger.debug(
            "Reachability walk finished",
            extra={"entry_node_id": entry, "visited": len(finished)},
        )
        return finished
