"""actionflow - minimal action-graph execution engine."""

from actionflow.core.graph import (
    BaseNode,
    Node,
    BatchNode,
    ParallelBatchNode,
    Flow,
    BatchFlow,
    ParallelBatchFlow,
    FlowExecError,
    NodeStatus,
    NodeType,
    RetryPolicy,
    flow_to_json,
)
from actionflow.core.logging import configure_logging, LogLevel, LogComponent

__all__ = [
    'BaseNode',
    'Node',
    'BatchNode',
    'ParallelBatchNode',
    'Flow',
    'BatchFlow',
    'ParallelBatchFlow',
    'FlowExecError',
    'NodeStatus',
    'NodeType',
    'RetryPolicy',
    'flow_to_json',
    'configure_logging',
    'LogLevel',
    'LogComponent'
]
