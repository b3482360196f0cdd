"""
Main Comparison Entry Point.

Orchestrates one reference/candidate comparison:
1. Pair-wise length truncation
2. Descriptor extraction for both recordings
3. Scoring with the expert ensemble
4. Curve remapping into the reported score
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pymimicscore.audio import Waveform

from pymimicscore.analysis.constants import FALLBACK_SCORE, SPECTRUM_SYNTHETIC
from pymimicscore.analysis.experts.base import ComparisonContext
from pymimicscore.analysis.experts.ensemble import ExpertEnsemble
from pymimicscore.analysis.features import Features, extract_features
from pymimicscore.analysis.scoring import ScoreBreakdown
from pymimicscore.exceptions import MissingInputError


def extract_pair(
    reference: Waveform,
    candidate: Waveform,
    spectrum: str = SPECTRUM_SYNTHETIC,
    parallel: bool = False,
) -> tuple[Features, Features]:
    """
    Extract descriptors of both recordings over their common length.

    Both recordings are analyzed over the first ``min(len1, len2)`` samples;
    durations still come from the full recordings. With ``parallel`` the two
    extractions run on separate threads and are joined before returning.
    """
    n_samples = min(reference.length, candidate.length)

    if reference.sample_rate != candidate.sample_rate:
        logging.warning(
            f"Sample rates differ ({reference.sample_rate} Hz vs {candidate.sample_rate} Hz); "
            "each recording is analyzed at its own rate."
        )

    if not parallel:
        return (
            extract_features(reference, n_samples, spectrum=spectrum),
            extract_features(candidate, n_samples, spectrum=spectrum),
        )

    with ThreadPoolExecutor(max_workers=2) as executor:
        ref_future = executor.submit(extract_features, reference, n_samples, spectrum)
        cand_future = executor.submit(extract_features, candidate, n_samples, spectrum)
        return ref_future.result(), cand_future.result()


def score_waveforms(
    reference: Waveform | None,
    candidate: Waveform | None,
    spectrum: str = SPECTRUM_SYNTHETIC,
    parallel: bool = False,
    ensemble: ExpertEnsemble | None = None,
) -> ScoreBreakdown:
    """
    Score how closely ``candidate`` imitates ``reference``.

    Args:
        reference: The original (forward) performance
        candidate: The imitation, already reversed back to forward orientation
        spectrum: Magnitude source for timbre/centroid ("synthetic" or "fft")
        parallel: Extract both recordings on separate threads
        ensemble: Expert ensemble to use (a fresh one by default)

    Returns:
        ScoreBreakdown with every similarity term and the final score

    Raises:
        MissingInputError: If either recording is absent
    """
    if reference is None or candidate is None:
        missing = "reference" if reference is None else "candidate"
        raise MissingInputError(f"Missing {missing} recording for comparison.")

    t0 = time.perf_counter()
    logging.info(
        f"Comparing reference ({reference.duration:.2f}s, {reference.length} samples) "
        f"with candidate ({candidate.duration:.2f}s, {candidate.length} samples)"
    )

    ref_feat, cand_feat = extract_pair(reference, candidate, spectrum=spectrum, parallel=parallel)
    logging.debug(f"Feature extraction: {time.perf_counter() - t0:.3f}s")

    ensemble = ensemble or ExpertEnsemble()
    ctx = ComparisonContext(reference=ref_feat, candidate=cand_feat)

    scores = ensemble.expert_scores(ctx)
    raw = ensemble.combine(scores)
    breakdown = ScoreBreakdown.from_scores(scores, raw)

    for expert in ensemble.experts:
        logging.info(f"{expert.label}: {scores[expert.name]:.1%} (weight: {expert.weight:.0%})")
    logging.info(f"Raw weighted score: {raw:.1%}")
    logging.info(f"After curve adjustment: {breakdown.adjusted:.1f}")
    logging.info(f"Final score: {breakdown.score}")
    if logging.getLogger().isEnabledFor(logging.DEBUG):
        ensemble.explain(ctx)
    logging.debug(f"Comparison total: {time.perf_counter() - t0:.3f}s")

    return breakdown


def compare_waveforms(
    reference: Waveform | None,
    candidate: Waveform | None,
    spectrum: str = SPECTRUM_SYNTHETIC,
    parallel: bool = False,
) -> int:
    """
    Similarity score in [0, 100] that never raises.

    A missing recording, or any failure while scoring, yields the fixed
    participation score so that the game can always move on to the next turn.
    """
    try:
        return score_waveforms(reference, candidate, spectrum=spectrum, parallel=parallel).score
    except MissingInputError as e:
        logging.warning(f"{e} Returning participation score {FALLBACK_SCORE}.")
        return FALLBACK_SCORE
    except Exception:
        logging.exception(f"Comparison failed; returning participation score {FALLBACK_SCORE}.")
        return FALLBACK_SCORE
