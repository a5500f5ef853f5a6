"""Flow Classes

This module defines the orchestrators of the graph system. A Flow owns a start
node and drives traversal:

1. Clone the current node and hand it the traversal's params
2. Run its prep/exec/post lifecycle
3. Use the returned action to pick a successor
4. Repeat until no successor matches

Flows are nodes themselves, so they can be nested inside other flows. Batch
flows re-run the whole traversal once per parameter set returned by prep,
either sequentially (BatchFlow) or concurrently (ParallelBatchFlow).

Example:
    ```python
    review = ReviewNode()
    review - "approve" >> PublishNode()
    review - "revise" >> DraftNode()

    flow = Flow(start=review)
    shared = {"draft": "..."}
    await flow.run(shared)
    ```
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import Field, PrivateAttr

from actionflow.core.logging import (
    FlowLoggingConfig,
    LogComponent,
    get_logger,
    log_state,
    log_verbose,
)
from actionflow.core.graph.state import NodeStatus, NodeType
from actionflow.core.graph.nodes.base.node import BaseNode


class FlowExecError(RuntimeError):
    """Raised when exec is called on a flow; flows only orchestrate."""


class Flow(BaseNode):
    """Traverses a graph of nodes starting at ``start``.

    Attributes:
        start: First node of every traversal (never run directly, only clones)
        logging_config: Controls progress message verbosity
    """
    start: BaseNode = Field(..., repr=False)
    logging_config: FlowLoggingConfig = Field(default_factory=FlowLoggingConfig)

    node_type: ClassVar[NodeType] = NodeType.FLOW
    label: ClassVar[str] = "flow"

    _last_action: Optional[str] = PrivateAttr(default=None)

    def __init__(self, start: BaseNode, logger: Optional[logging.Logger] = None, **data):
        super().__init__(start=start, **data)
        self._logger = logger or get_logger(LogComponent.FLOW)

    async def exec(self, prep_res: Any) -> Any:
        raise FlowExecError("Flow can't exec.")

    async def post(self, shared: Any, prep_res: Any, exec_res: Any) -> Optional[str]:
        """Default: None, so an enclosing flow continues on its "default" edge."""
        return None

    async def run(self, shared: Any) -> Optional[str]:
        """Run the traversal from ``start``.

        Returns post's action, or when that is None the action of the node the
        traversal ended on (None if it stopped on an unmatched action).
        """
        action = await super().run(shared)
        return action if action is not None else self._last_action

    def _log_progress(self, message: str) -> None:
        self._logger.log(self.logging_config.level, message)

    def _log_step(self, message: str) -> None:
        if self.logging_config.show_node_transitions:
            self._logger.log(self.logging_config.level, message)
        else:
            log_verbose(self._logger, message)

    async def _orchestrate(
        self, shared: Any, params: Optional[Dict[str, Any]] = None
    ) -> Optional[str]:
        """Walk the graph once, cloning each node right before it runs.

        Every node in the walk receives the same params mapping object, the
        flow's own params unless ``params`` is given, so writes to
        ``self.params`` inside a node are visible to later nodes and to the flow.

        Returns the last node's action if it had no successors to choose from.
        """
        current = self.start.clone()
        p = params if params is not None else self.params
        while True:
            current.set_params(p)
            name = type(current).__name__
            self._log_step(f"Executing node: {name}")
            action = await current._run(shared)
            self._log_step(f"Node {name} completed with action: {action}")
            successor = current.get_next_node(action)
            if successor is None:
                return None if current.successors else action
            current = successor.clone()

    def _prepared(self, prep_res: Any) -> Any:
        return prep_res

    async def _traverse(self, shared: Any, prep_res: Any) -> Optional[str]:
        return await self._orchestrate(shared)

    async def _run(self, shared: Any) -> Optional[str]:
        name = type(self).__name__
        self._status = NodeStatus.RUNNING
        self._log_progress(f"Starting {self.label}: {name}")
        try:
            prep_res = self._prepared(await self.prep(shared))
            self._last_action = await self._traverse(shared, prep_res)
            action = await self.post(shared, prep_res, None)
        except Exception as exc:
            self._status = NodeStatus.FAIL
            self._logger.error(f"{self.label.capitalize()} {name} failed: {exc}")
            raise
        self._status = NodeStatus.SUCCESS
        self._log_progress(f"{self.label.capitalize()} {name} completed successfully")
        return action


class BatchFlow(Flow):
    """Runs the whole traversal once per parameter set returned by prep.

    Each set is merged over the flow's own params, with the set's keys winning.
    """

    node_type: ClassVar[NodeType] = NodeType.BATCH_FLOW
    label: ClassVar[str] = "batch flow"

    async def prep(self, shared: Any) -> List[Dict[str, Any]]:
        return []

    def _prepared(self, prep_res: Any) -> List[Any]:
        # Materialized once so traversal and post see the same sets
        return list(prep_res or [])

    def _merged_params(self, batch_params: Any) -> Dict[str, Any]:
        if not isinstance(batch_params, Mapping):
            raise TypeError(
                f"Batch params must be mappings, got {type(batch_params).__name__}"
            )
        return {**self.params, **batch_params}

    async def _traverse(self, shared: Any, prep_res: Any) -> Optional[str]:
        for index, batch_params in enumerate(prep_res):
            merged = self._merged_params(batch_params)
            self._log_step(f"Processing batch item {index + 1}/{len(prep_res)}")
            log_state(self._logger, merged, prefix="  ")
            await self._orchestrate(shared, merged)
        return None


class ParallelBatchFlow(BatchFlow):
    """Runs one traversal per parameter set concurrently.

    Branches share the shared context; they must not depend on each other's writes.
    """

    node_type: ClassVar[NodeType] = NodeType.PARALLEL_BATCH_FLOW
    label: ClassVar[str] = "parallel batch flow"

    async def _traverse(self, shared: Any, prep_res: Any) -> Optional[str]:
        merged = [self._merged_params(batch_params) for batch_params in prep_res]
        self._log_step(f"Processing {len(merged)} batch items in parallel")
        await asyncio.gather(*(self._orchestrate(shared, params) for params in merged))
        return None
