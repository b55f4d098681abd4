"""Observers for workflow execution.

An observer is passed to `Workflow.run()`; the workflow itself carries no
debug state. Observers are purely observational and cannot change the path
taken.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Protocol

from pydantic import BaseModel, Field

from decisive_flow.graph.outcomes import NodeId


class TraceObserver(Protocol):
    def on_start(self, node_id: NodeId) -> None: ...

    def on_decision(
        self, node_id: NodeId, handler_name: str, outcome: bool, next_id: NodeId
    ) -> None: ...

    def on_action(self, node_id: NodeId, handler_name: str, next_id: NodeId) -> None: ...

    def on_final(self, node_id: NodeId, handler_name: str, result: Any) -> None: ...


class TraceStep(BaseModel):
    """One visited node, as recorded by :class:`RecordingTraceObserver`."""

    kind: Literal["start", "decision", "action", "final"]
    node_id: str
    handler: str | None = Field(default=None)
    outcome: bool | None = Field(default=None)
    next_id: str | None = Field(default=None)
    result: str | None = Field(default=None, description="repr() of the final result")


class RecordingTraceObserver:
    """Keeps every step in memory, in visiting order."""

    def __init__(self) -> None:
        self.steps: list[TraceStep] = []

    def on_start(self, node_id: NodeId) -> None:
        self.steps.append(TraceStep(kind="start", node_id=node_id))

    def on_decision(
        self, node_id: NodeId, handler_name: str, outcome: bool, next_id: NodeId
    ) -> None:
        self.steps.append(
            TraceStep(
                kind="decision",
                node_id=node_id,
                handler=handler_name,
                outcome=outcome,
                next_id=next_id,
            )
        )

    def on_action(self, node_id: NodeId, handler_name: str, next_id: NodeId) -> None:
        self.steps.append(
            TraceStep(kind="action", node_id=node_id, handler=handler_name, next_id=next_id)
        )

    def on_final(self, node_id: NodeId, handler_name: str, result: Any) -> None:
        self.steps.append(
            TraceStep(kind="final", node_id=node_id, handler=handler_name, result=repr(result))
        )

    @property
    def path(self) -> list[NodeId]:
        """Node ids in visiting order, without the start marker."""

        return [step.node_id for step in self.steps if step.kind != "start"]


class LoggingTraceObserver:
    """Reports each step through standard logging."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("decisive_flow.trace")
        self._level = level

    def on_start(self, node_id: NodeId) -> None:
        self._logger.log(self._level, "Start node: %s", node_id, extra={"node_id": node_id})

    def on_decision(
        self, node_id: NodeId, handler_name: str, outcome: bool, next_id: NodeId
    ) -> None:
        self._logger.log(
            self._level,
            "Decision node: %s, %s -> <%s>",
            node_id,
            handler_name,
            outcome,
            extra={
                "node_id": node_id,
                "handler": handler_name,
                "outcome": outcome,
                "next_id": next_id,
            },
        )

    def on_action(self, node_id: NodeId, handler_name: str, next_id: NodeId) -> None:
        self._logger.log(
            self._level,
            "Action node: %s, %s",
            node_id,
            handler_name,
            extra={"node_id": node_id, "handler": handler_name, "next_id": next_id},
        )

    def on_final(self, node_id: NodeId, handler_name: str, result: Any) -> None:
        self._logger.log(
            self._level,
            "End node: %s, %s -> %r",
            node_id,
            handler_name,
            result,
            extra={"node_id": node_id, "handler": handler_name, "result": repr(result)},
        )
