"""
Energy Flow Expert - Envelope Shape Match.

Correlates the short-time RMS envelopes of both recordings so that a
performance with the same rise and fall of loudness scores high even when
its absolute level differs.
"""

from __future__ import annotations

from pymimicscore.analysis.constants import ENVELOPE_STD_MIN, WEIGHT_ENVELOPE
from pymimicscore.analysis.experts.base import ComparisonContext, Expert, pearson_correlation


class EnergyFlowExpert(Expert):
    """Expert for envelope/dynamics shape."""

    name = "envelope"
    label = "Envelope match"
    weight = WEIGHT_ENVELOPE

    def score(self, ctx: ComparisonContext) -> float:
        """Pearson correlation of the envelopes (truncated, not warped), mapped to [0, 1]."""
        corr = pearson_correlation(ctx.reference.envelope, ctx.candidate.envelope, min_std=ENVELOPE_STD_MIN)
        return (corr + 1.0) / 2.0

    def explain(self, ctx: ComparisonContext) -> str:
        corr = pearson_correlation(ctx.reference.envelope, ctx.candidate.envelope, min_std=ENVELOPE_STD_MIN)
        return (
            f"Envelope: {(corr + 1.0) / 2.0:.2f} | "
            f"Correlation: {corr:+.2f} | "
            f"Windows: {ctx.reference.envelope.size} vs {ctx.candidate.envelope.size}"
        )
