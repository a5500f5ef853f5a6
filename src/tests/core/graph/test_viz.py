"""Tests for graph visualization export."""

from actionflow.core.graph.base import BatchFlow, Flow
from actionflow.core.graph.nodes.base.node import Node
from actionflow.core.graph.nodes.batch import BatchNode
from actionflow.core.graph.state import NodeStatus
from actionflow.core.graph.viz import GraphVisualizer, VisualizationData, flow_to_json


class LoadNode(Node):
    pass


class ParseNode(BatchNode):
    pass


class TestFlowToJson:
    """Test suite for flow_to_json."""

    def test_linear_flow(self):
        """Test nodes and links inside a single flow group."""
        load = LoadNode().set_summary("Load input").set_config({"path": "in.txt"})
        load >> ParseNode()
        data = flow_to_json(Flow(start=load))

        assert data["nodes"] == [
            {
                "id": 1,
                "name": "LoadNode",
                "group": 1,
                "status": 0,
                "config": {"path": "in.txt"},
                "summary": "Load input",
            },
            {
                "id": 2,
                "name": "ParseNode",
                "group": 1,
                "status": 0,
                "config": {},
                "summary": "",
            },
        ]
        assert data["links"] == [{"source": 1, "target": 2, "action": "default"}]
        assert data["group_links"] == []
        assert data["flows"] == {"1": "Flow"}

    def test_cycles_terminate(self):
        """Test that a looping graph is exported once per node."""
        a, b = Node(), Node()
        a - "next" >> b
        b - "back" >> a
        data = flow_to_json(Flow(start=a))

        assert [n["id"] for n in data["nodes"]] == [1, 2]
        assert data["links"] == [
            {"source": 1, "target": 2, "action": "next"},
            {"source": 2, "target": 1, "action": "back"},
        ]

    def test_flow_to_flow_group_links(self):
        """Test edges between flows and from nodes into flows."""
        first = Flow(start=LoadNode())
        second = BatchFlow(start=ParseNode())
        first - "parsed" >> second

        tail = Node()
        entry = LoadNode()
        entry >> Flow(start=tail)

        data = flow_to_json(first)
        assert data["flows"] == {"1": "Flow", "2": "BatchFlow"}
        assert data["group_links"] == [{"source": 1, "target": 2, "action": "parsed"}]
        assert [(n["name"], n["group"]) for n in data["nodes"]] == [
            ("LoadNode", 1),
            ("ParseNode", 2),
        ]

        data = flow_to_json(entry)
        assert data["group_links"] == [{"source": 0, "target": 1, "action": "default"}]
        assert [(n["name"], n["group"]) for n in data["nodes"]] == [
            ("LoadNode", 0),
            ("Node", 1),
        ]

    def test_flow_successor_nodes_join_flow_group(self):
        """Test that a plain node after a flow is drawn in the flow's group."""
        flow = Flow(start=LoadNode())
        flow >> ParseNode()
        data = flow_to_json(flow)
        assert [(n["name"], n["group"]) for n in data["nodes"]] == [
            ("LoadNode", 1),
            ("ParseNode", 1),
        ]

    async def test_reports_current_status(self):
        """Test that statuses are read, not reset."""
        node = Node()
        await node.run({})
        data = flow_to_json(node)
        assert data["nodes"][0]["status"] == int(NodeStatus.SUCCESS)


class TestGraphVisualizer:
    """Test suite for the visualizer object."""

    def test_render_is_repeatable(self):
        a = Node()
        a >> Node()
        visualizer = GraphVisualizer(Flow(start=a))
        first = visualizer.render_graph()
        second = visualizer.render_graph()
        assert isinstance(first, VisualizationData)
        assert first == second
        assert len(second.nodes) == 2
