"""
Graph Export Example

Builds a small review workflow with a nested flow and writes the
visualization JSON produced by flow_to_json next to this file.
"""

import json
from pathlib import Path

from actionflow.core.graph import Flow, Node, flow_to_json


class DraftNode(Node):
    pass


class ReviewNode(Node):
    pass


class PublishNode(Node):
    pass


class NotifyNode(Node):
    pass


def build_flow() -> Flow:
    draft = DraftNode().set_summary("Write a first draft").set_config({"model": "small"})
    review = ReviewNode().set_summary("Approve or request changes")
    draft >> review
    review - "revise" >> draft

    publishing = Flow(start=PublishNode().set_summary("Publish the post"))
    publishing >> NotifyNode().set_summary("Tell subscribers")
    review - "approve" >> publishing

    return Flow(start=draft)


def main():
    data = flow_to_json(build_flow())
    output = Path(__file__).with_suffix(".json")
    output.write_text(json.dumps(data, indent=2))
    print(f"Wrote {len(data['nodes'])} nodes and {len(data['flows'])} flows to {output}")


if __name__ == "__main__":
    main()
