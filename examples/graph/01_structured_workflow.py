"""
Structured Workflow Example

This example demonstrates:
1. The prep/exec/post node lifecycle
2. Branching on the action returned by post
3. Retries with backoff and a fallback for a flaky step
4. Pydantic models for the values passed through the shared context

The workflow:
- Takes input text
- Analyzes it (sentiment, topics, complexity)
- Routes to a summarize or simplify step based on the analysis
"""

import asyncio
import random
from typing import Any, List, Optional
from pydantic import BaseModel, Field

from actionflow.core.logging import (
    configure_logging,
    LogLevel,
    LogComponent,
    Colors,
    FlowLoggingConfig,
    get_logger
)
from actionflow.core.graph import Flow, Node

logger = get_logger(LogComponent.WORKFLOW)

class TextAnalysis(BaseModel):
    """Structured analysis of input text."""
    sentiment: str = Field(..., description="The emotional tone (positive/negative/neutral)")
    topics: List[str] = Field(..., description="Main topics identified")
    complexity: int = Field(..., ge=1, le=5, description="Complexity score (1-5)")

class AnalyzerNode(Node):
    """Analyzes the input text. Stands in for an unreliable model call."""

    async def prep(self, shared: dict) -> str:
        return shared["text"]

    async def exec(self, text: str) -> TextAnalysis:
        if random.random() < 0.5:
            raise ConnectionError("analysis service unavailable")
        words = text.split()
        return TextAnalysis(
            sentiment="positive" if "remarkable" in words else "neutral",
            topics=sorted({w.strip(".,").lower() for w in words if len(w) > 10}),
            complexity=min(5, max(1, len(words) // 8)),
        )

    async def exec_fallback(self, text: str, exc: Exception) -> TextAnalysis:
        logger.warning(f"Analysis failed ({exc}), using a neutral default")
        return TextAnalysis(sentiment="neutral", topics=[], complexity=3)

    async def post(self, shared: dict, prep_res: Any, exec_res: TextAnalysis) -> Optional[str]:
        shared["analysis"] = exec_res
        return "simplify" if exec_res.complexity >= 3 else "summarize"

class SummarizeNode(Node):
    """Keeps the first sentence."""

    async def prep(self, shared: dict) -> str:
        return shared["text"]

    async def exec(self, text: str) -> str:
        return text.split(".")[0] + "."

    async def post(self, shared: dict, prep_res: Any, exec_res: str) -> Optional[str]:
        shared["output"] = exec_res
        return None

class SimplifyNode(Node):
    """Keeps only short words."""

    async def prep(self, shared: dict) -> str:
        return shared["text"]

    async def exec(self, text: str) -> str:
        limit = self.params.get("max_word_length", 8)
        return " ".join(w for w in text.split() if len(w) <= limit)

    async def post(self, shared: dict, prep_res: Any, exec_res: str) -> Optional[str]:
        shared["output"] = exec_res
        return None

class EndNode(Node):
    """Terminal node that displays results."""

    async def post(self, shared: dict, prep_res: Any, exec_res: Any) -> Optional[str]:
        analysis = shared["analysis"]
        print(f"\n{Colors.SUCCESS}Analysis:{Colors.RESET}")
        print(f"Sentiment: {analysis.sentiment}")
        print(f"Topics: {', '.join(analysis.topics)}")
        print(f"Complexity: {analysis.complexity}/5")
        print(f"\n{Colors.SUCCESS}Output:{Colors.RESET}")
        print(shared["output"])
        return "done"

def build_flow() -> Flow:
    analyzer = AnalyzerNode(max_retries=3, wait=0.2)
    end = EndNode()
    analyzer - "summarize" >> SummarizeNode() >> end
    analyzer - "simplify" >> SimplifyNode() >> end

    return Flow(
        start=analyzer,
        logging_config=FlowLoggingConfig(show_node_transitions=True),
    ).set_params({"max_word_length": 6})

async def main():
    """Run the structured workflow."""
    configure_logging(default_level=LogLevel.INFO)
    logger.info("Starting workflow...")

    shared = {
        "text": """
            Artificial intelligence has revolutionized many industries,
            from healthcare to transportation. Machine learning models
            can now perform complex tasks with remarkable accuracy.
            """.strip()
    }

    print(f"\n{Colors.INFO}Input Text:{Colors.RESET}")
    print(shared["text"])

    try:
        await build_flow().run(shared)
    except Exception as e:
        logger.error(f"Workflow failed: {str(e)}")
        raise

if __name__ == "__main__":
    asyncio.run(main())
