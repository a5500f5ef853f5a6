"""Graph visualization export.

Walks a constructed graph through the read-only node API and produces a
JSON-ready description for a front end to render:

- nodes:       every leaf node, numbered from 1, with the group it belongs to
- links:       node -> node edges labelled with their action
- group_links: edges that enter or leave a flow, between group numbers
- flows:       group number -> flow class name (group 0 is the top level)

Nothing is executed or mutated; statuses are reported as they currently are.
"""

from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field

from actionflow.core.logging import get_logger, LogComponent
from actionflow.core.graph.base import Flow
from actionflow.core.graph.nodes.base.node import BaseNode

logger = get_logger(LogComponent.VIZ)


class NodeData(BaseModel):
    id: int
    name: str
    group: int
    status: int
    config: Dict[str, Any] = Field(default_factory=dict)
    summary: str = ""


class LinkData(BaseModel):
    source: int
    target: int
    action: str


class VisualizationData(BaseModel):
    nodes: List[NodeData] = Field(default_factory=list)
    links: List[LinkData] = Field(default_factory=list)
    group_links: List[LinkData] = Field(default_factory=list)
    flows: Dict[str, str] = Field(default_factory=dict)


class GraphVisualizer:
    """Visualize graph structure and execution state."""

    def __init__(self, start: BaseNode):
        self.start = start
        self._node_ids: Dict[BaseNode, int] = {}
        self._flow_groups: Dict[Flow, int] = {}
        self._visited: Set[BaseNode] = set()
        self._data: Optional[VisualizationData] = None

    def _node_id(self, node: BaseNode) -> int:
        if node not in self._node_ids:
            self._node_ids[node] = len(self._node_ids) + 1
        return self._node_ids[node]

    def _group_id(self, flow: Flow) -> int:
        if flow not in self._flow_groups:
            self._flow_groups[flow] = len(self._flow_groups) + 1
        return self._flow_groups[flow]

    def _traverse(self, node: BaseNode, group: int = 0) -> None:
        if node in self._visited:
            return
        self._visited.add(node)

        if isinstance(node, Flow):
            flow_group = self._group_id(node)
            self._traverse(node.start, flow_group)
            source_group = flow_group
        else:
            node_id = self._node_id(node)
            self._data.nodes.append(
                NodeData(
                    id=node_id,
                    name=type(node).__name__,
                    group=group,
                    status=node.get_status(),
                    config=node.get_config(),
                    summary=node.get_summary(),
                )
            )
            source_group = group

        for action, successor in node.get_successors().items():
            if isinstance(successor, Flow):
                self._data.group_links.append(
                    LinkData(
                        source=source_group,
                        target=self._group_id(successor),
                        action=action,
                    )
                )
                self._traverse(successor, 0)
            elif isinstance(node, Flow):
                self._traverse(successor, source_group)
            else:
                self._data.links.append(
                    LinkData(source=node_id, target=self._node_id(successor), action=action)
                )
                self._traverse(successor, group)

    def render_graph(self) -> VisualizationData:
        """Build the visualization data for the whole graph reachable from start."""
        self._node_ids.clear()
        self._flow_groups.clear()
        self._visited.clear()
        self._data = VisualizationData()

        self._traverse(self.start)
        self._data.flows = {
            str(group): type(flow).__name__ for flow, group in self._flow_groups.items()
        }
        logger.debug(
            f"Rendered {len(self._data.nodes)} nodes, {len(self._data.links)} links, "
            f"{len(self._data.flows)} flows"
        )
        return self._data


def flow_to_json(start: BaseNode) -> Dict[str, Any]:
    """Describe the graph reachable from ``start`` as a JSON-ready dict."""
    return GraphVisualizer(start).render_graph().model_dump()
