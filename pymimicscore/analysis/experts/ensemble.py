"""
Expert Ensemble with fixed weighting.

Combines the six similarity experts into one raw score in [0, 1]. Weights
are fixed so that a score means the same thing from one turn to the next.
"""

from __future__ import annotations

import logging

import numpy as np

from pymimicscore.analysis.experts.base import ComparisonContext, Expert
from pymimicscore.analysis.experts.dynamics import DynamicsExpert
from pymimicscore.analysis.experts.energy_flow import EnergyFlowExpert
from pymimicscore.analysis.experts.melodic import MelodicExpert
from pymimicscore.analysis.experts.phrase import PhraseExpert
from pymimicscore.analysis.experts.spectral import SpectralExpert
from pymimicscore.analysis.experts.timbre import TimbreExpert


class ExpertEnsemble:
    """
    6-Expert Ensemble with fixed weights.

    0. TimbreExpert     - Band-energy timbre (35%)
    1. MelodicExpert    - Pitch contour (25%)
    2. EnergyFlowExpert - Envelope shape (15%)
    3. SpectralExpert   - Spectral centroid (10%)
    4. DynamicsExpert   - Overall loudness (10%)
    5. PhraseExpert     - Duration (5%)
    """

    def __init__(self):
        self.experts: list[Expert] = [
            TimbreExpert(),      # 0
            MelodicExpert(),     # 1
            EnergyFlowExpert(),  # 2
            SpectralExpert(),    # 3
            DynamicsExpert(),    # 4
            PhraseExpert(),      # 5
        ]

        self.weights = np.array([expert.weight for expert in self.experts], dtype=np.float64)

        if not np.isclose(np.sum(self.weights), 1.0):
            raise ValueError(f"Expert weights must sum to 1.0, got {np.sum(self.weights):.4f}")

    def expert_scores(self, ctx: ComparisonContext) -> dict[str, float]:
        """Individual similarity of every expert, keyed by expert name."""
        return {expert.name: float(expert.score(ctx)) for expert in self.experts}

    def combine(self, scores: dict[str, float]) -> float:
        """Weighted combination of per-expert similarities."""
        return float(sum(expert.weight * scores[expert.name] for expert in self.experts))

    def score(self, ctx: ComparisonContext) -> float:
        """
        Raw fused similarity in [0, 1].

        Uses a plain weighted sum without any gating so that each term's
        contribution to the final score stays fixed.
        """
        return self.combine(self.expert_scores(ctx))

    def explain(self, ctx: ComparisonContext) -> list[str]:
        lines = [expert.explain(ctx) for expert in self.experts]
        for line in lines:
            logging.debug(line)
        return lines
