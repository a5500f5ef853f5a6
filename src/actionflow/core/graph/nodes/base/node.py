"""Base node classes for the graph system.

This module defines the Node abstraction for the Flow framework. A Node represents
an individual unit of work (e.g., an LLM call, a tool invocation, a parsing step)
that can be executed within a larger workflow. Nodes are Pydantic models and run
asynchronously through a three-phase lifecycle:

    prep(shared)                     -> read what the node needs from the shared context
    exec(prep_res)                   -> do the work; retried according to the retry policy
    post(shared, prep_res, exec_res) -> write results back and return the next action

Typical Usage:
    - Create a subclass of Node
    - Override 'prep', 'exec' and 'post' to implement custom logic
    - Wire successors with 'next', 'on' or the '>>' / '- "action" >>' operators
    - Hand the first node to a Flow and await 'flow.run(shared)'
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, Optional, TypeVar

from pydantic import BaseModel, Field, PrivateAttr

from actionflow.core.logging import get_logger, LogComponent
from actionflow.core.graph.state import NodeStatus, NodeType, RetryPolicy

# Get logger for node operations
logger = get_logger(LogComponent.NODES)

DEFAULT_ACTION = "default"

N = TypeVar("N", bound="BaseNode")


class _ConditionalTransition:
    """Intermediate result of ``node - "action"``, completed by ``>> target``."""

    def __init__(self, src: "BaseNode", action: str):
        self.src = src
        self.action = action

    def __rshift__(self, target: N) -> N:
        self.src.on(self.action, target)
        return target


class BaseNode(BaseModel):
    """
    Shared lifecycle, successor table and introspection surface for all nodes.

    Attributes:
        params: Flat per-traversal parameters, set by the orchestrating flow
        successors: Mapping of action labels to successor nodes
        config: Free-form configuration exposed for visualization
        summary: Free-form description exposed for visualization
        filepath: Source file the node was declared in, if recorded
    """
    params: Dict[str, Any] = Field(default_factory=dict)
    successors: Dict[str, "BaseNode"] = Field(default_factory=dict, repr=False)
    config: Dict[str, Any] = Field(default_factory=dict)
    summary: str = Field(default="")
    filepath: str = Field(default="")

    node_type: ClassVar[NodeType] = NodeType.BASE

    _status: NodeStatus = PrivateAttr(default=NodeStatus.PENDING)
    _logger: logging.Logger = PrivateAttr(default_factory=lambda: logger)

    class Config:
        arbitrary_types_allowed = True

    # Compared and hashed by identity
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    # Lifecycle hooks, overridden by subclasses
    async def prep(self, shared: Any) -> Any:
        return None

    async def exec(self, prep_res: Any) -> Any:
        return None

    async def post(self, shared: Any, prep_res: Any, exec_res: Any) -> Optional[str]:
        return None

    async def _exec(self, prep_res: Any) -> Any:
        return await self.exec(prep_res)

    async def _run(self, shared: Any) -> Optional[str]:
        """Run prep, exec and post once, tracking status.

        Any exception marks the node as failed and is re-raised.
        """
        self._status = NodeStatus.RUNNING
        try:
            prep_res = await self.prep(shared)
            exec_res = await self._exec(prep_res)
            action = await self.post(shared, prep_res, exec_res)
        except Exception:
            self._status = NodeStatus.FAIL
            raise
        self._status = NodeStatus.SUCCESS
        return action

    async def run(self, shared: Any) -> Optional[str]:
        """Run this node on its own. Successors are never followed."""
        if self.successors:
            self._logger.warning("Node won't run successors. Use Flow.")
        return await self._run(shared)

    # Graph wiring
    def set_params(self: N, params: Mapping) -> N:
        """Replace the node's parameters.

        Raises:
            TypeError: If params is not a mapping
        """
        if not isinstance(params, Mapping):
            raise TypeError(
                f"Node params must be a mapping, got {type(params).__name__}"
            )
        self.params = params
        return self

    def on(self: N, action: str, node: "BaseNode") -> N:
        """Register ``node`` as the successor for ``action``."""
        if action in self.successors:
            self._logger.warning(f"Overwriting successor for action '{action}'")
        self.successors[action] = node
        return self

    def next(self, node: N, action: str = DEFAULT_ACTION) -> N:
        """Register ``node`` as a successor and return it, for chaining."""
        self.on(action, node)
        return node

    def __rshift__(self, other: N) -> N:
        return self.next(other)

    def __sub__(self, action: str) -> _ConditionalTransition:
        if isinstance(action, str):
            return _ConditionalTransition(self, action)
        raise TypeError("Action must be a string")

    def get_next_node(self, action: Optional[str] = None) -> Optional["BaseNode"]:
        """Look up the successor for ``action`` ("default" when empty).

        An unmatched action ends the traversal; it is reported, not raised.
        """
        next_action = action or DEFAULT_ACTION
        successor = self.successors.get(next_action)
        if successor is None and self.successors:
            self._logger.warning(
                f"Flow ends: '{next_action}' not found in {list(self.successors)}"
            )
        return successor

    def clone(self: N) -> N:
        """Shallow copy used for a single traversal step.

        params, successors and config are copied so changes on the clone stay
        on the clone; successor nodes themselves and the logger are shared.
        """
        return self.model_copy(
            update={
                "params": dict(self.params),
                "successors": dict(self.successors),
                "config": dict(self.config),
            }
        )

    # Introspection
    @property
    def status(self) -> NodeStatus:
        return self._status

    def get_status(self) -> int:
        return int(self._status)

    def get_successors(self) -> Dict[str, "BaseNode"]:
        return dict(self.successors)

    def set_config(self: N, config: Dict[str, Any]) -> N:
        self.config = config
        return self

    def get_config(self) -> Dict[str, Any]:
        return self.config

    def set_summary(self: N, summary: str) -> N:
        self.summary = summary
        return self

    def get_summary(self) -> str:
        return self.summary

    def get_node_type(self) -> NodeType:
        return self.node_type

    def set_filepath(self: N, filepath: str) -> N:
        self.filepath = filepath
        return self

    def get_filepath(self) -> str:
        return self.filepath

    def set_logger(self: N, logger: logging.Logger) -> N:
        """Inject the logger used for advisory warnings and progress messages."""
        self._logger = logger
        return self


class Node(BaseNode):
    """
    Leaf node whose exec phase is retried on failure.

    Attributes:
        retry_policy: Number of exec attempts and the wait between them

    Example:
        class FetchNode(Node):
            async def prep(self, shared):
                return shared["url"]

            async def exec(self, url):
                return await download(url)

            async def post(self, shared, prep_res, exec_res):
                shared["page"] = exec_res
                return "parse"

        fetch = FetchNode(max_retries=3, wait=0.5)
    """
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)

    node_type: ClassVar[NodeType] = NodeType.NODE

    _cur_retry: int = PrivateAttr(default=0)

    def __init__(self, max_retries: int = 1, wait: float = 0, **data):
        data.setdefault("retry_policy", RetryPolicy(max_retries=max_retries, wait=wait))
        super().__init__(**data)

    @property
    def max_retries(self) -> int:
        return self.retry_policy.max_retries

    @property
    def wait(self) -> float:
        return self.retry_policy.wait

    @property
    def cur_retry(self) -> int:
        """Zero-based index of the exec attempt in progress."""
        return self._cur_retry

    async def exec_fallback(self, prep_res: Any, exc: Exception) -> Any:
        """Called once all attempts failed. The return value replaces exec's."""
        raise exc

    async def _exec(self, prep_res: Any) -> Any:
        name = type(self).__name__
        for attempt in range(self.max_retries):
            self._cur_retry = attempt
            try:
                return await self.exec(prep_res)
            except Exception as exc:
                if attempt == self.max_retries - 1:
                    self._status = NodeStatus.FAIL
                    self._logger.error(
                        f"Node {name}: exec failed after {self.max_retries} attempt(s): {exc}"
                    )
                    return await self.exec_fallback(prep_res, exc)
                self._logger.info(
                    f"Node {name}: attempt {attempt + 1}/{self.max_retries} failed: {exc}"
                )
                if self.wait > 0:
                    await asyncio.sleep(self.wait)
        return None
