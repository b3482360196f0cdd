"""Tests for the similarity experts and their alignment helpers."""

import numpy as np
import pytest

from pymimicscore.analysis.experts import (
    ComparisonContext,
    DynamicsExpert,
    EnergyFlowExpert,
    ExpertEnsemble,
    MelodicExpert,
    PhraseExpert,
    SpectralExpert,
    TimbreExpert,
    align,
    aligned_indices,
    cosine_similarity,
    pearson_correlation,
)
from pymimicscore.analysis.experts.dynamics import energy_match
from pymimicscore.analysis.experts.melodic import median_pitch, pitch_contour_match
from pymimicscore.analysis.experts.phrase import duration_match
from pymimicscore.analysis.experts.spectral import centroid_match
from pymimicscore.analysis.experts.timbre import mean_cosine_similarity
from pymimicscore.analysis.features import extract_features


class TestAlignment:
    """Tests for the linear time-warp alignment."""

    def test_downsample_indices(self):
        assert aligned_indices(10, 5).tolist() == [0, 2, 4, 6, 8]

    def test_identity_indices(self):
        assert aligned_indices(7, 7).tolist() == list(range(7))

    def test_uneven_ratio_floors(self):
        # floor(k * 5 / 3) for k = 0, 1, 2
        assert aligned_indices(5, 3).tolist() == [0, 1, 3]

    def test_no_points(self):
        assert aligned_indices(5, 0).size == 0

    def test_align_uses_shorter_length(self):
        a, b = align(np.arange(8), np.arange(4))
        assert a.tolist() == [0, 2, 4, 6]
        assert b.tolist() == [0, 1, 2, 3]


class TestTimbreSimilarity:
    """Tests for cosine-based timbre similarity."""

    def test_identical_vectors(self):
        v = np.array([[1.0, 2.0, 3.0]])
        assert cosine_similarity(v, v)[0] == pytest.approx(1.0)

    def test_opposite_vectors(self):
        v = np.array([[1.0, 2.0, 3.0]])
        assert cosine_similarity(v, -v)[0] == pytest.approx(-1.0)

    def test_zero_vector_is_finite(self):
        z = np.zeros((1, 3))
        assert cosine_similarity(z, z)[0] == 0.0

    def test_empty_sequence(self):
        assert mean_cosine_similarity(np.zeros((0, 13)), np.ones((4, 13))) == 0.0

    def test_aligned_mean(self):
        f1 = np.array([[1.0, 0.0], [0.0, 1.0]])
        f2 = np.array([[1.0, 0.0], [1.0, 0.0], [0.0, 1.0], [0.0, 1.0]])
        # f2 resampled at indices [0, 2] matches f1 exactly
        assert mean_cosine_similarity(f1, f2) == pytest.approx(1.0)


class TestPitchContourMatch:
    """Tests for the pitch contour similarity."""

    def test_both_unvoiced_is_neutral(self):
        assert pitch_contour_match(np.zeros(5), np.zeros(5)) == 0.5

    def test_empty_contour_is_neutral(self):
        assert pitch_contour_match(np.zeros(0), np.full(5, 200.0)) == 0.5

    def test_one_side_unvoiced_is_full_penalty(self):
        assert pitch_contour_match(np.full(4, 200.0), np.zeros(4)) == 0.0

    def test_octave_apart(self):
        assert pitch_contour_match(np.array([100.0]), np.array([200.0])) == pytest.approx(0.5)

    def test_unvoiced_pairs_are_skipped(self):
        c1 = np.array([0.0, 0.0, 150.0])
        c2 = np.array([0.0, 0.0, 150.0])
        assert pitch_contour_match(c1, c2) == 1.0

    def test_time_warped_contours(self):
        c1 = np.array([100.0, 100.0, 200.0, 200.0])
        c2 = np.array([100.0, 200.0])
        assert pitch_contour_match(c1, c2) == 1.0

    def test_mixed_penalties(self):
        c1 = np.array([100.0, 0.0, 0.0])
        c2 = np.array([200.0, 300.0, 0.0])
        # (0.5 + 1) / 2 counted frames
        assert pitch_contour_match(c1, c2) == pytest.approx(1 - 0.75)

    def test_median_pitch_ignores_unvoiced(self):
        assert median_pitch(np.array([0.0, 100.0, 300.0, 0.0])) == 200.0
        assert median_pitch(np.zeros(3)) == 0.0


class TestEnvelopeCorrelation:
    """Tests for Pearson correlation of envelopes."""

    def test_perfect_correlation(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        assert pearson_correlation(x, 2 * x + 1) == pytest.approx(1.0)

    def test_anti_correlation(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        assert pearson_correlation(x, -x) == pytest.approx(-1.0)

    def test_truncates_not_warps(self):
        assert pearson_correlation(np.array([1.0, 2.0, 3.0, 100.0]), np.array([1.0, 2.0, 3.0])) == pytest.approx(1.0)

    def test_zero_variance(self):
        assert pearson_correlation(np.full(5, 0.3), np.arange(5.0)) == 0.0

    def test_near_constant_treated_as_constant(self):
        flat = 0.3 + 1e-14 * np.arange(5.0)
        assert pearson_correlation(flat, np.arange(5.0)) == 0.0
        assert pearson_correlation(flat, np.arange(5.0), min_std=0.0) == pytest.approx(1.0, abs=0.05)

    def test_empty(self):
        assert pearson_correlation(np.zeros(0), np.arange(5.0)) == 0.0


class TestScalarMatches:
    """Tests for centroid, energy and duration matches."""

    def test_centroid_half(self):
        assert centroid_match(1000.0, 500.0) == pytest.approx(0.5)

    def test_centroid_both_zero(self):
        assert centroid_match(0.0, 0.0) == 1.0

    def test_centroid_guarded_denominator(self):
        assert centroid_match(0.0, 0.5) == pytest.approx(0.5)

    def test_centroid_clipped(self):
        assert centroid_match(0.0, 3000.0) == 0.0

    def test_energy_silent_candidate(self):
        assert energy_match(0.5, 0.0) == 0.0

    def test_energy_both_silent(self):
        assert energy_match(0.0, 0.0) == 0.0

    def test_energy_ratio(self):
        assert energy_match(0.25, 0.5) == pytest.approx(0.5)

    def test_duration_ratio(self):
        assert duration_match(1.0, 0.9) == pytest.approx(0.9)

    def test_duration_equal(self):
        assert duration_match(2.5, 2.5) == 1.0

    def test_duration_both_empty(self):
        assert duration_match(0.0, 0.0) == 1.0


class TestExperts:
    """Tests for the expert classes on real descriptors."""

    @pytest.fixture
    def ctx(self, voiced_waveform, other_voiced_waveform):
        n = min(voiced_waveform.length, other_voiced_waveform.length)
        return ComparisonContext(
            reference=extract_features(voiced_waveform, n),
            candidate=extract_features(other_voiced_waveform, n),
        )

    @pytest.mark.parametrize(
        "expert_cls",
        [TimbreExpert, MelodicExpert, EnergyFlowExpert, SpectralExpert, DynamicsExpert, PhraseExpert],
    )
    def test_scores_in_unit_range(self, ctx, expert_cls):
        score = expert_cls().score(ctx)
        assert 0.0 <= score <= 1.0

    @pytest.mark.parametrize(
        "expert_cls",
        [TimbreExpert, MelodicExpert, EnergyFlowExpert, SpectralExpert, DynamicsExpert, PhraseExpert],
    )
    def test_symmetric(self, ctx, expert_cls):
        expert = expert_cls()
        assert expert.score(ctx) == expert.score(ctx.swapped())

    @pytest.mark.parametrize(
        "expert_cls",
        [TimbreExpert, MelodicExpert, EnergyFlowExpert, SpectralExpert, DynamicsExpert, PhraseExpert],
    )
    def test_explain_mentions_score(self, ctx, expert_cls):
        expert = expert_cls()
        assert f"{expert.score(ctx):.2f}" in expert.explain(ctx)

    def test_duration_expert_uses_full_recordings(self, ctx):
        assert PhraseExpert().score(ctx) == pytest.approx(0.8)


class TestExpertEnsemble:
    """Tests for the fixed-weight ensemble."""

    def test_weights(self):
        ensemble = ExpertEnsemble()
        weights = {expert.name: expert.weight for expert in ensemble.experts}
        assert weights == {
            "timbre": 0.35,
            "pitch": 0.25,
            "envelope": 0.15,
            "centroid": 0.10,
            "energy": 0.10,
            "duration": 0.05,
        }
        assert sum(weights.values()) == pytest.approx(1.0)

    def test_combine_all_perfect(self):
        ensemble = ExpertEnsemble()
        scores = {expert.name: 1.0 for expert in ensemble.experts}
        assert ensemble.combine(scores) == pytest.approx(1.0)

    def test_combine_single_term(self):
        ensemble = ExpertEnsemble()
        scores = {expert.name: 0.0 for expert in ensemble.experts}
        scores["pitch"] = 1.0
        assert ensemble.combine(scores) == pytest.approx(0.25)

    def test_explain_lists_every_expert(self, voiced_waveform):
        feat = extract_features(voiced_waveform)
        lines = ExpertEnsemble().explain(ComparisonContext(feat, feat))
        assert len(lines) == 6
