"""
Parallel Batch Example

This example demonstrates:
1. A ParallelBatchNode fanning one step out over many items
2. A BatchFlow re-running a whole sub-graph once per parameter set
3. A ParallelBatchFlow doing the same concurrently

The workflow scores a few short poems under several rubrics, then prints
the results table.
"""

import asyncio
import time
from typing import Any, Dict, List, Optional

from actionflow.core.logging import configure_logging, get_logger, LogComponent, LogLevel
from actionflow.core.graph import BatchFlow, Flow, Node, ParallelBatchFlow, ParallelBatchNode

logger = get_logger(LogComponent.WORKFLOW)

POEMS = {
    "nature": ["old silent pond", "a frog jumps into the pond", "splash silence again"],
    "emotion": ["the light of a candle", "is transferred to another", "spring twilight"],
}

class ScoreLinesNode(ParallelBatchNode):
    """Scores every line of one poem concurrently under one rubric."""

    async def prep(self, shared: dict) -> List[str]:
        return POEMS[self.params["poem"]]

    async def exec(self, line: str) -> float:
        # Stand-in for a per-line model call
        await asyncio.sleep(0.05)
        if self.params["rubric"] == "brevity":
            return round(1 / len(line.split()), 2)
        return float(len(set(line)) / max(len(line), 1))

    async def post(self, shared: dict, prep_res: Any, exec_res: List[float]) -> Optional[str]:
        key = (self.params["poem"], self.params["rubric"])
        shared.setdefault("scores", {})[key] = round(sum(exec_res), 2)
        return None

class RubricBatchFlow(BatchFlow):
    """Scores one poem under each rubric, one after another."""

    async def prep(self, shared: dict) -> List[Dict[str, Any]]:
        return [{"rubric": rubric} for rubric in shared["rubrics"]]

class PoemBatchFlow(ParallelBatchFlow):
    """Scores all poems concurrently."""

    async def prep(self, shared: dict) -> List[Dict[str, Any]]:
        return [{"poem": name} for name in POEMS]

class ReportNode(Node):
    async def prep(self, shared: dict) -> Dict[Any, float]:
        return shared["scores"]

    async def post(self, shared: dict, prep_res: Dict[Any, float], exec_res: Any) -> Optional[str]:
        for (poem, rubric), score in sorted(prep_res.items()):
            print(f"{poem:<10} {rubric:<10} {score:>6}")
        return None

async def main():
    configure_logging(default_level=LogLevel.INFO)

    poems = PoemBatchFlow(start=RubricBatchFlow(start=ScoreLinesNode()))
    poems >> ReportNode()

    shared = {"rubrics": ["brevity", "variety"]}
    started = time.perf_counter()
    await Flow(start=poems).run(shared)
    logger.info(f"Scored {len(shared['scores'])} poem/rubric pairs in {time.perf_counter() - started:.2f}s")

if __name__ == "__main__":
    asyncio.run(main())
