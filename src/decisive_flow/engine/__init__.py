"""Execution engine and trace observers."""

from decisive_flow.engine.executor import ExecutionEngine
from decisive_flow.engine.trace import (
    LoggingTraceObserver,
    RecordingTraceObserver,
    TraceObserver,
    TraceStep,
)

__all__ = [
    "ExecutionEngine",
    "LoggingTraceObserver",
    "RecordingTraceObserver",
    "TraceObserver",
    "TraceStep",
]
