"""
Data models for complexity estimates and analysis reports.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class ComplexityEstimate(BaseModel):
    """Inline complexity label with where it came from."""

    notation: str = Field(description="Big-O label, e.g. O(n log n)")
    source: Literal["model", "heuristic"] = Field(
        description="Remote model answer or offline heuristic"
    )
    tier: Literal["fast", "linear", "slow", "critical"]
    color: str = Field(description="Display color for the label")
    cached: bool = Field(default=False)


class ComplexityMetric(BaseModel):
    notation: str = Field(description="Big-O notation, O(?) when missing")
    description: str = Field(default="")


BlockKind = Literal[
    "time", "space", "bottleneck", "optimization", "rating", "paragraph", "code"
]


class ReportBlock(BaseModel):
    """
    One rendered piece of an analysis report, in report order.

    ``notation`` is only set for time and space blocks. For code blocks
    ``text`` holds the raw fenced content.
    """

    kind: BlockKind
    text: str = Field(default="")
    notation: Optional[str] = Field(default=None)


class AnalysisReport(BaseModel):
    """Free-text model report split into its labeled fields."""

    raw: str = Field(description="Report text as returned by the model")
    blocks: list[ReportBlock] = Field(default_factory=list)

    def _first(self, kind: str) -> Optional[ReportBlock]:
        return next((b for b in self.blocks if b.kind == kind), None)

    @property
    def time_complexity(self) -> Optional[ComplexityMetric]:
        block = self._first("time")
        if block is None:
            return None
        return ComplexityMetric(notation=block.notation or "O(?)", description=block.text)

    @property
    def space_complexity(self) -> Optional[ComplexityMetric]:
        block = self._first("space")
        if block is None:
            return None
        return ComplexityMetric(notation=block.notation or "O(?)", description=block.text)

    @property
    def bottleneck(self) -> Optional[str]:
        block = self._first("bottleneck")
        return block.text if block else None

    @property
    def optimization(self) -> Optional[str]:
        block = self._first("optimization")
        return block.text if block else None

    @property
    def rating(self) -> Optional[str]:
        block = self._first("rating")
        return block.text if block else None

    @property
    def code_blocks(self) -> list[str]:
        return [b.text for b in self.blocks if b.kind == "code"]
