"""Outcome graph: node ids and their successor edges."""

from decisive_flow.graph.outcome_graph import OutcomeGraph
from decisive_flow.graph.outcomes import ActionOutcome, DecisionOutcome, NodeId, Outcome

__all__ = [
    "ActionOutcome",
    "DecisionOutcome",
    "NodeId",
    "Outcome",
    "OutcomeGraph",
]
