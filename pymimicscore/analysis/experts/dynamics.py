"""
Dynamics Expert - Overall Loudness Match.

Ratio of the total RMS energies of both recordings.
"""

from __future__ import annotations

from pymimicscore.analysis.constants import ENERGY_FLOOR, WEIGHT_ENERGY
from pymimicscore.analysis.experts.base import ComparisonContext, Expert


class DynamicsExpert(Expert):
    """Expert for loudness similarity."""

    name = "energy"
    label = "Energy match"
    weight = WEIGHT_ENERGY

    def score(self, ctx: ComparisonContext) -> float:
        return energy_match(ctx.reference.rms, ctx.candidate.rms)

    def explain(self, ctx: ComparisonContext) -> str:
        return (
            f"Energy: {self.score(ctx):.2f} | "
            f"RMS: {ctx.reference.rms:.4f} vs {ctx.candidate.rms:.4f}"
        )


def energy_match(rms1: float, rms2: float) -> float:
    return min(rms1, rms2) / max(rms1, rms2, ENERGY_FLOOR)
