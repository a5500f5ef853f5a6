"""Node package initialization.

Exposes node types for building workflows.
"""

from actionflow.core.graph.nodes.base.node import BaseNode, Node
from actionflow.core.graph.nodes.batch import BatchNode, ParallelBatchNode

__all__ = [
    "BaseNode",
    "Node",
    "BatchNode",
    "ParallelBatchNode",
]
