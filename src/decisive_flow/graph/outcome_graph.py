from __future__ import annotations

from collections.abc import Iterator

from .outcomes import ActionOutcome, DecisionOutcome, NodeId, Outcome


class OutcomeGraph:
    """Mapping of node ids to their outgoing edges.

    A node id that is referenced as a successor but never added as a key is a
    terminal node. This layer does not detect cycles or duplicate keys; `put`
    simply overwrites.
    """

    def __init__(self) -> None:
        self._nodes: dict[NodeId, Outcome] = {}

    def put(self, node_id: NodeId, outcome: Outcome) -> None:
        self._nodes[node_id] = outcome

    def get(self, node_id: NodeId) -> Outcome | None:
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._nodes)

    def items(self) -> list[tuple[NodeId, Outcome]]:
        return list(self._nodes.items())

    def is_decision(self, node_id: NodeId) -> bool:
        return isinstance(self._nodes.get(node_id), DecisionOutcome)

    def is_action(self, node_id: NodeId) -> bool:
        return isinstance(self._nodes.get(node_id), ActionOutcome)

    def is_terminal(self, node_id: NodeId) -> bool:
        return node_id not in self._nodes

    def all_referenced_node_ids(self) -> frozenset[NodeId]:
        """Every key plus every successor, terminals included."""

        ids: set[NodeId] = set(self._nodes)
        for outcome in self._nodes.values():
            ids.update(outcome.successors())
        return frozenset(ids)

    def copy(self) -> OutcomeGraph:
        graph = OutcomeGraph()
        graph._nodes = dict(self._nodes)
        return graph

    def to_json(self) -> dict[str, object]:
        terminals = sorted(i for i in self.all_referenced_node_ids() if i not in self._nodes)
        return {
            "nodes": {node_id: outcome.to_json() for node_id, outcome in self._nodes.items()},
            "terminals": terminals,
        }
