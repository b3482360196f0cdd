"""
Phrase Expert - Duration Match.

A mimic that runs much shorter or longer than the original loses a little
credit, independently of what it sounds like.
"""

from __future__ import annotations

from pymimicscore.analysis.constants import DURATION_FLOOR, WEIGHT_DURATION
from pymimicscore.analysis.experts.base import ComparisonContext, Expert


class PhraseExpert(Expert):
    """Expert for phrase length."""

    name = "duration"
    label = "Duration match"
    weight = WEIGHT_DURATION

    def score(self, ctx: ComparisonContext) -> float:
        return duration_match(ctx.reference.duration, ctx.candidate.duration)

    def explain(self, ctx: ComparisonContext) -> str:
        return (
            f"Duration: {self.score(ctx):.2f} | "
            f"{ctx.reference.duration:.2f}s vs {ctx.candidate.duration:.2f}s"
        )


def duration_match(dur1: float, dur2: float) -> float:
    """``1 - |d1 - d2| / max(d1, d2)``; two empty recordings match exactly."""
    return 1.0 - abs(dur1 - dur2) / max(dur1, dur2, DURATION_FLOOR)
