"""Test suite for the actionflow graph system.

1. Flow Tests (test_base.py)
   - Orchestration loop and action routing
   - Batch and parallel batch flows
   - Error propagation

2. Node Tests (nodes/)
   - Lifecycle, retry and fallback
   - Successor wiring and cloning
   - Batch and parallel batch nodes

3. State (test_state.py)
   - Status codes, node type tags, retry settings

4. Visualization (test_viz.py)
   - Graph export
"""
