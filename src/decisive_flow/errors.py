"""Error taxonomy for workflow construction and execution.

Every error is fatal to the operation in progress. Construction-time errors
(everything except :class:`ExecutionError`) prevent a workflow from ever being
returned to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable


class WorkflowError(Exception):
    """Base class for all decisive-flow errors."""

    def __init__(self, message: str, *, node_id: str | None = None) -> None:
        super().__init__(message)
        self.node_id = node_id


class StructuralError(WorkflowError):
    """The shape of the graph is invalid."""


class GraphTooSmallError(StructuralError):
    pass


class DuplicateNodeError(StructuralError):
    pass


class CircularGraphError(StructuralError):
    """The graph contains a cycle, so no terminal outcome is guaranteed."""

    def __init__(
        self, message: str, *, node_id: str | None = None, path: Iterable[str] = ()
    ) -> None:
        super().__init__(message, node_id=node_id)
        self.path = tuple(path)


class MultipleStartNodesError(StructuralError):
    def __init__(self, message: str, *, candidates: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.candidates = tuple(candidates)


class UnreachableNodeError(StructuralError):
    def __init__(self, message: str, *, unreachable: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.unreachable = tuple(unreachable)


class BindingError(WorkflowError):
    """A node and its handler binding do not agree."""


class SignatureError(WorkflowError):
    """A handler's declared signature violates its capability contract."""


class IncompleteOutcomeError(WorkflowError):
    """A decision or action edge is missing a required successor."""


class ExecutionError(WorkflowError):
    """A handler raised (or misbehaved) while the workflow was running."""

    def __init__(self, message: str, *, node_id: str, handler_name: str) -> None:
        super().__init__(message, node_id=node_id)
        self.handler_name = handler_name
