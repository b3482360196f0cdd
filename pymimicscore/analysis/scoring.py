"""
Score Curve Module.

Turns the raw fused similarity into the 0-100 integer shown to players. The
piecewise curve spreads the useful part of the raw range: good matches stay
high while poor matches drop quickly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pymimicscore.analysis.constants import (
    CURVE_HIGH_BASE,
    CURVE_HIGH_SLOPE,
    CURVE_HIGH_THRESHOLD,
    CURVE_LOW_SLOPE,
    CURVE_MID_BASE,
    CURVE_MID_SLOPE,
    CURVE_MID_THRESHOLD,
    SCORE_MAX,
    SCORE_MIN,
)


@dataclass(slots=True, frozen=True)
class ScoreBreakdown:
    """Every intermediate value of one comparison."""

    timbre: float
    pitch: float
    envelope: float
    centroid: float
    energy: float
    duration: float

    raw: float        # Weighted fusion in [0, 1]
    adjusted: float   # After curve and clamp, before rounding
    score: int        # Reported score

    @classmethod
    def from_scores(cls, scores: dict[str, float], raw: float) -> ScoreBreakdown:
        adjusted = clamp_score(adjust_score(raw))
        return cls(
            timbre=scores["timbre"],
            pitch=scores["pitch"],
            envelope=scores["envelope"],
            centroid=scores["centroid"],
            energy=scores["energy"],
            duration=scores["duration"],
            raw=raw,
            adjusted=adjusted,
            score=round_score(adjusted),
        )

    def terms(self) -> dict[str, float]:
        return {
            "timbre": self.timbre,
            "pitch": self.pitch,
            "envelope": self.envelope,
            "centroid": self.centroid,
            "energy": self.energy,
            "duration": self.duration,
        }

    def to_dict(self) -> dict:
        return {**self.terms(), "raw": self.raw, "adjusted": self.adjusted, "score": self.score}


def adjust_score(raw: float) -> float:
    """
    Piecewise remap of a raw similarity onto the 0-100 scale.

    - raw > 0.7:        50 + (raw - 0.7) * 166.667   (0.7-1.0 -> 50-100)
    - 0.4 < raw <= 0.7: 20 + (raw - 0.4) * 100       (0.4-0.7 -> 20-50)
    - raw <= 0.4:       raw * 50                     (0-0.4 -> 0-20)
    """
    if raw > CURVE_HIGH_THRESHOLD:
        return CURVE_HIGH_BASE + (raw - CURVE_HIGH_THRESHOLD) * CURVE_HIGH_SLOPE
    elif raw > CURVE_MID_THRESHOLD:
        return CURVE_MID_BASE + (raw - CURVE_MID_THRESHOLD) * CURVE_MID_SLOPE
    else:
        return raw * CURVE_LOW_SLOPE


def clamp_score(adjusted: float) -> float:
    return max(float(SCORE_MIN), min(float(SCORE_MAX), adjusted))


def round_score(adjusted: float) -> int:
    """Round half up, so 49.5 reports as 50."""
    return int(math.floor(adjusted + 0.5))


def final_score(raw: float) -> int:
    """Raw fused similarity to the reported integer score."""
    return round_score(clamp_score(adjust_score(raw)))
