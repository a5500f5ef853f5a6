"""State and settings shared by every node in the graph system.

This module provides:
1. NodeStatus: An enumeration of node execution statuses
2. NodeType: The tag each node variant carries for introspection
3. RetryPolicy: Validated retry settings for a node's exec phase
"""

from enum import Enum, IntEnum
from pydantic import BaseModel, Field

class NodeStatus(IntEnum):
    """Node execution status.

    Integer-valued so the status code can be exported as-is.
    """
    PENDING = 0
    RUNNING = 1
    SUCCESS = 2
    FAIL = 3

class NodeType(str, Enum):
    """Node variant tag."""
    BASE = "base"
    NODE = "node"
    BATCH_NODE = "batch"
    PARALLEL_BATCH_NODE = "parallel_batch"
    FLOW = "flow"
    BATCH_FLOW = "batch_flow"
    PARALLEL_BATCH_FLOW = "parallel_batch_flow"

class RetryPolicy(BaseModel):
    """Retry settings for a node's exec phase.

    Attributes:
        max_retries: Total number of exec attempts (1 means no retry)
        wait: Seconds to sleep between failed attempts
    """
    max_retries: int = Field(default=1, ge=1)
    wait: float = Field(default=0, ge=0)
