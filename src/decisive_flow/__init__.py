"""decisive-flow: binary-decision workflows.

Describe a workflow as a graph of named decision, action and final nodes,
bind each node to a handler, validate the whole graph once, then run it
deterministically from its single inferred start node.
"""

__version__ = "0.1.0"

from decisive_flow.builder import WorkflowBuilder
from decisive_flow.engine.trace import LoggingTraceObserver, RecordingTraceObserver, TraceObserver
from decisive_flow.errors import (
    BindingError,
    CircularGraphError,
    DuplicateNodeError,
    ExecutionError,
    GraphTooSmallError,
    IncompleteOutcomeError,
    MultipleStartNodesError,
    SignatureError,
    StructuralError,
    UnreachableNodeError,
    WorkflowError,
)
from decisive_flow.handlers.registry import (
    HandlerKind,
    HandlerRegistry,
    action_node,
    decision_node,
    final_node,
)
from decisive_flow.workflow import Workflow

__all__ = [
    "__version__",
    "BindingError",
    "CircularGraphError",
    "DuplicateNodeError",
    "ExecutionError",
    "GraphTooSmallError",
    "HandlerKind",
    "HandlerRegistry",
    "IncompleteOutcomeError",
    "LoggingTraceObserver",
    "MultipleStartNodesError",
    "RecordingTraceObserver",
    "SignatureError",
    "StructuralError",
    "TraceObserver",
    "UnreachableNodeError",
    "Workflow",
    "WorkflowBuilder",
    "WorkflowError",
    "action_node",
    "decision_node",
    "final_node",
]
