"""Graph package initialization.

Exposes node and flow classes and helpers for building workflows.
"""

from actionflow.core.graph.state import NodeStatus, NodeType, RetryPolicy
from actionflow.core.graph.nodes.base.node import BaseNode, Node
from actionflow.core.graph.nodes.batch import BatchNode, ParallelBatchNode
from actionflow.core.graph.base import (
    Flow,
    BatchFlow,
    ParallelBatchFlow,
    FlowExecError,
)
from actionflow.core.graph.viz import GraphVisualizer, flow_to_json

__all__ = [
    # Nodes
    "BaseNode",
    "Node",
    "BatchNode",
    "ParallelBatchNode",

    # Flows
    "Flow",
    "BatchFlow",
    "ParallelBatchFlow",
    "FlowExecError",

    # State
    "NodeStatus",
    "NodeType",
    "RetryPolicy",

    # Visualization
    "GraphVisualizer",
    "flow_to_json",
]
