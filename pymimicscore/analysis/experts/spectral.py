"""
Spectral Expert - Brightness Match.

Compares the mean spectral centroids of both recordings.
"""

from __future__ import annotations

from pymimicscore.analysis.constants import CENTROID_FLOOR, WEIGHT_CENTROID
from pymimicscore.analysis.experts.base import ComparisonContext, Expert


class SpectralExpert(Expert):
    """Expert for spectral brightness."""

    name = "centroid"
    label = "Spectral centroid"
    weight = WEIGHT_CENTROID

    def score(self, ctx: ComparisonContext) -> float:
        return centroid_match(ctx.reference.spectral_centroid, ctx.candidate.spectral_centroid)

    def explain(self, ctx: ComparisonContext) -> str:
        return (
            f"Centroid: {self.score(ctx):.2f} | "
            f"{ctx.reference.spectral_centroid:.0f} Hz vs {ctx.candidate.spectral_centroid:.0f} Hz"
        )


def centroid_match(c1: float, c2: float) -> float:
    """``1 - min(1, |c1 - c2| / max(c1, c2, 1))``."""
    return 1.0 - min(1.0, abs(c1 - c2) / max(c1, c2, CENTROID_FLOOR))
