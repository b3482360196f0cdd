"""
Timbre Expert - Band-Energy (MFCC-like) Similarity.

Compares the per-frame log band-energy vectors of both recordings after
linear time-warp alignment, using cosine similarity.
"""

from __future__ import annotations

import numpy as np

from pymimicscore.analysis.constants import COSINE_EPSILON, WEIGHT_TIMBRE
from pymimicscore.analysis.experts.base import ComparisonContext, Expert, align, cosine_similarity


class TimbreExpert(Expert):
    """Expert for tone-colour similarity."""

    name = "timbre"
    label = "MFCC similarity (timbre)"
    weight = WEIGHT_TIMBRE  # Dominant term - tone colour is what listeners notice first

    def score(self, ctx: ComparisonContext) -> float:
        """Mean aligned cosine similarity, remapped from [-1, 1] to [0, 1]."""
        return (mean_cosine_similarity(ctx.reference.timbre, ctx.candidate.timbre) + 1.0) / 2.0

    def explain(self, ctx: ComparisonContext) -> str:
        score = self.score(ctx)
        return (
            f"Timbre: {score:.2f} | "
            f"Frames: {ctx.reference.n_frames} vs {ctx.candidate.n_frames}"
        )


def mean_cosine_similarity(features1: np.ndarray, features2: np.ndarray) -> float:
    """Average cosine similarity of aligned frame vectors; 0 if either side is empty."""
    if len(features1) == 0 or len(features2) == 0:
        return 0.0

    f1, f2 = align(features1, features2)
    return float(np.mean(cosine_similarity(f1, f2, eps=COSINE_EPSILON)))
