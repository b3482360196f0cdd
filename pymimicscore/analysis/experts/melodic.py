"""
Melodic Expert - Pitch Contour Match.

Compares the autocorrelation pitch contours of both recordings:
- Frames unvoiced on both sides are ignored
- A frame voiced on only one side is a full mismatch
- Voiced pairs are penalized by their relative pitch difference
"""

from __future__ import annotations

import numpy as np

from pymimicscore.analysis.constants import PITCH_NEUTRAL_SIMILARITY, UNVOICED, WEIGHT_PITCH
from pymimicscore.analysis.experts.base import ComparisonContext, Expert, align


class MelodicExpert(Expert):
    """Expert for melodic contour similarity."""

    name = "pitch"
    label = "Pitch contour match"
    weight = WEIGHT_PITCH

    def score(self, ctx: ComparisonContext) -> float:
        return pitch_contour_match(ctx.reference.pitch, ctx.candidate.pitch)

    def explain(self, ctx: ComparisonContext) -> str:
        score = self.score(ctx)
        return (
            f"Pitch: {score:.2f} | "
            f"Voiced: {ctx.reference.voiced_ratio:.0%} vs {ctx.candidate.voiced_ratio:.0%} | "
            f"Median: {median_pitch(ctx.reference.pitch):.1f} Hz vs {median_pitch(ctx.candidate.pitch):.1f} Hz"
        )


def pitch_contour_match(contour1: np.ndarray, contour2: np.ndarray) -> float:
    """
    Similarity of two pitch contours in [0, 1].

    Returns the neutral 0.5 when either contour is empty or when no aligned
    frame is voiced on either side.
    """
    if len(contour1) == 0 or len(contour2) == 0:
        return PITCH_NEUTRAL_SIMILARITY

    p1, p2 = align(contour1, contour2)
    voiced1 = p1 != UNVOICED
    voiced2 = p2 != UNVOICED

    counted = voiced1 | voiced2
    if not np.any(counted):
        return PITCH_NEUTRAL_SIMILARITY

    both = voiced1 & voiced2
    diff = np.ones(p1.shape[0], dtype=np.float64)
    diff[both] = np.minimum(1.0, np.abs(p1[both] - p2[both]) / np.maximum(p1[both], p2[both]))

    return float(1.0 - np.mean(diff[counted]))


def median_pitch(contour: np.ndarray) -> float:
    voiced = contour[contour != UNVOICED]
    return float(np.median(voiced)) if voiced.size else 0.0
