"""
Base Expert Interface and Comparison Context.

Provides the abstract interface that all similarity experts implement,
plus the context object carrying the descriptors of both recordings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from pymimicscore.analysis.features import Features


@dataclass(slots=True, frozen=True)
class ComparisonContext:
    """
    Descriptors of the reference and candidate recordings of one turn.

    Experts only ever read from the context, so the same instance can be
    scored by every expert in any order.
    """

    reference: Features
    candidate: Features

    def swapped(self) -> ComparisonContext:
        return ComparisonContext(reference=self.candidate, candidate=self.reference)


class Expert(ABC):
    """
    Abstract base class for descriptor similarity experts.

    Each expert compares one descriptor of the two recordings and returns a
    similarity in [0, 1] where 1 is a perfect match. Experts must be
    symmetric: swapping reference and candidate leaves the score unchanged.
    """

    name: str = "base"
    label: str = "Base"
    weight: float = 0.0  # Fixed weight in the fused score

    @abstractmethod
    def score(self, ctx: ComparisonContext) -> float:
        """
        Evaluate the similarity from this expert's perspective.

        Args:
            ctx: Descriptors of both recordings

        Returns:
            Similarity in [0, 1]
        """
        pass

    @abstractmethod
    def explain(self, ctx: ComparisonContext) -> str:
        """Human-readable explanation of the score."""
        pass


def aligned_indices(length: int, n_points: int) -> np.ndarray:
    """
    Linear time-warp: map comparison index ``k`` to ``floor(k * length / n_points)``.

    Stretches or squeezes one sequence onto ``n_points`` comparison points
    without any dynamic time warping.
    """
    if n_points <= 0:
        return np.zeros(0, dtype=np.int64)
    k = np.arange(n_points, dtype=np.int64)
    return (k * length) // n_points


def align(seq1: np.ndarray, seq2: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Resample two frame sequences onto ``min(len1, len2)`` shared comparison points."""
    n_points = min(len(seq1), len(seq2))
    return (
        seq1[aligned_indices(len(seq1), n_points)],
        seq2[aligned_indices(len(seq2), n_points)],
    )


def cosine_similarity(a: np.ndarray, b: np.ndarray, eps: float = 1e-10) -> np.ndarray:
    """Row-wise cosine similarity ``dot / (sqrt(|a|^2 * |b|^2) + eps)``."""
    dot = np.sum(a * b, axis=-1)
    mag_a = np.sum(a * a, axis=-1)
    mag_b = np.sum(b * b, axis=-1)
    return dot / (np.sqrt(mag_a * mag_b) + eps)


def pearson_correlation(x: np.ndarray, y: np.ndarray, min_std: float = 1e-12) -> float:
    """Pearson r of two sequences truncated to the shorter one; 0 if either is constant."""
    n = min(len(x), len(y))
    if n == 0:
        return 0.0

    x = np.asarray(x[:n], dtype=np.float64)
    y = np.asarray(y[:n], dtype=np.float64)
    # Near-constant input counts as constant, slightly stricter than a zero denominator
    if np.std(x) <= min_std or np.std(y) <= min_std:
        return 0.0

    dx = x - x.mean()
    dy = y - y.mean()
    den = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if den == 0:
        return 0.0
    return float(np.clip(np.sum(dx * dy) / den, -1.0, 1.0))
