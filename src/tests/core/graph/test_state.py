"""Tests for status codes, node type tags and retry settings."""

import pytest
from pydantic import ValidationError

from actionflow.core.graph.state import NodeStatus, NodeType, RetryPolicy


class TestNodeStatus:
    """Test suite for status codes."""

    def test_status_codes(self):
        """Test the exported integer codes."""
        assert [int(s) for s in NodeStatus] == [0, 1, 2, 3]
        assert NodeStatus.PENDING < NodeStatus.RUNNING < NodeStatus.SUCCESS < NodeStatus.FAIL

    def test_node_type_values(self):
        """Test the tags used by the visualizer."""
        assert {t.value for t in NodeType} == {
            "base",
            "node",
            "batch",
            "parallel_batch",
            "flow",
            "batch_flow",
            "parallel_batch_flow",
        }


class TestRetryPolicy:
    """Test suite for retry settings."""

    def test_defaults(self):
        policy = RetryPolicy()
        assert policy.max_retries == 1
        assert policy.wait == 0

    def test_from_dict(self):
        policy = RetryPolicy.model_validate({"max_retries": 4, "wait": 1.5})
        assert policy.max_retries == 4
        assert policy.wait == 1.5

    @pytest.mark.parametrize(
        "data",
        [{"max_retries": 0}, {"max_retries": -2}, {"wait": -0.1}],
    )
    def test_rejects_invalid_values(self, data):
        with pytest.raises(ValidationError):
            RetryPolicy(**data)
