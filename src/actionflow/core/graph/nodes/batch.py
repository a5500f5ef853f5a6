"""
Batch Node Implementation

Nodes whose exec phase maps the single-item, retry-wrapped execution over a
sequence of items returned by prep:
- BatchNode runs the items one after another
- ParallelBatchNode runs them concurrently with asyncio.gather

Both return results in input order. Retries and the fallback apply per item.
"""

import asyncio
from collections.abc import Sequence
from typing import Any, ClassVar, List

from actionflow.core.graph.nodes.base.node import Node
from actionflow.core.graph.state import NodeType


def _as_items(items: Any) -> List[Any]:
    """Normalize prep's result to a list; anything that isn't a sequence is empty."""
    if items is None or isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        return []
    return list(items)


class BatchNode(Node):
    """Runs exec once per item, sequentially."""

    node_type: ClassVar[NodeType] = NodeType.BATCH_NODE

    async def _exec(self, items: Any) -> List[Any]:
        results = []
        for item in _as_items(items):
            results.append(await super()._exec(item))
        return results


class ParallelBatchNode(Node):
    """Runs exec for every item concurrently.

    exec must not touch the shared context; items may complete in any order.
    """

    node_type: ClassVar[NodeType] = NodeType.PARALLEL_BATCH_NODE

    async def _exec(self, items: Any) -> List[Any]:
        single = super()._exec
        return list(await asyncio.gather(*(single(item) for item in _as_items(items))))
