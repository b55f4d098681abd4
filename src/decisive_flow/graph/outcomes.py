from __future__ import annotations

from dataclasses import dataclass

from decisive_flow.errors import IncompleteOutcomeError

NodeId = str


def _require_node_id(value: object, *, role: str, owner: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise IncompleteOutcomeError(
            f"{owner} must have a {role} outcome node specified (not None or empty)."
        )


@dataclass(frozen=True, slots=True)
class DecisionOutcome:
    """Two successors selected by a boolean handler."""

    true_next: NodeId
    false_next: NodeId

    def __post_init__(self) -> None:
        _require_node_id(self.true_next, role="TRUE", owner="A decision node")
        _require_node_id(self.false_next, role="FALSE", owner="A decision node")

    def successors(self) -> tuple[NodeId, ...]:
        return (self.true_next, self.false_next)

    def references(self, node_id: NodeId) -> bool:
        return node_id in (self.true_next, self.false_next)

    def to_json(self) -> dict[str, object]:
        return {"kind": "decision", "true": self.true_next, "false": self.false_next}


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """A single successor reached after a side-effecting handler."""

    next: NodeId

    def __post_init__(self) -> None:
        _require_node_id(self.next, role="next", owner="An action node")

    def successors(self) -> tuple[NodeId, ...]:
        return (self.next,)

    def references(self, node_id: NodeId) -> bool:
        return node_id == self.next

    def to_json(self) -> dict[str, object]:
        return {"kind": "action", "next": self.next}


Outcome = DecisionOutcome | ActionOutcome
