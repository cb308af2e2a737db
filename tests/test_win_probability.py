"""Tests for the win probability estimator."""

import pytest

from src.odds_engine.errors import ContractViolationError
from src.odds_engine.models import EngineConfig
from src.odds_engine.win_probability import (
    FixedRandomSource,
    SystemRandomSource,
    WinProbabilityEstimator,
)


def _make_estimator(value=0.5, **config_overrides):
    return WinProbabilityEstimator(
        EngineConfig(**config_overrides), FixedRandomSource(value)
    )


# ── Random sources ───────────────────────────────────────────────────

class TestRandomSources:
    def test_fixed_source_repeats(self):
        source = FixedRandomSource(0.25)
        assert [source.next_float() for _ in range(3)] == [0.25, 0.25, 0.25]

    @pytest.mark.parametrize("value", [-0.1, 1.0, 2.0])
    def test_fixed_source_rejects_out_of_range(self, value):
        with pytest.raises(ValueError):
            FixedRandomSource(value)

    def test_seeded_system_source_is_reproducible(self):
        a = SystemRandomSource(seed=42)
        b = SystemRandomSource(seed=42)
        assert [a.next_float() for _ in range(5)] == [b.next_float() for _ in range(5)]


# ── Estimation ───────────────────────────────────────────────────────

class TestEstimateWinProbability:
    def test_proportional_split_without_variance(self):
        result = _make_estimator().estimate_win_probability(3.0, 1.0)
        assert result.prob_a == pytest.approx(0.75)
        assert result.prob_b == pytest.approx(0.25)
        assert result.variance == 0.0
        assert not result.clamped

    def test_equal_ratings_give_even_split(self):
        result = _make_estimator().estimate_win_probability(1.71, 1.71)
        assert result.prob_a == pytest.approx(0.5)
        assert result.prob_b == pytest.approx(0.5)

    def test_both_zero_is_coin_flip(self):
        result = _make_estimator().estimate_win_probability(0.0, 0.0)
        assert result.prob_a == 0.5
        assert result.prob_b == 0.5

    def test_negative_rating_raises(self):
        with pytest.raises(ContractViolationError):
            _make_estimator().estimate_win_probability(-1.0, 1.0)

    def test_lowest_draw_subtracts_max_variance(self):
        result = _make_estimator(0.0).estimate_win_probability(3.0, 1.0)
        assert result.variance == pytest.approx(-0.015)
        assert result.prob_a == pytest.approx(0.735)

    def test_high_draw_adds_variance(self):
        result = _make_estimator(0.75).estimate_win_probability(3.0, 1.0)
        assert result.variance == pytest.approx(0.0075)
        assert result.prob_a == pytest.approx(0.7575)

    def test_variance_is_bounded(self):
        estimator = WinProbabilityEstimator(EngineConfig(), SystemRandomSource(seed=7))
        for _ in range(200):
            result = estimator.estimate_win_probability(1.0, 1.0)
            assert abs(result.prob_a - 0.5) <= 0.015 + 1e-12

    def test_zero_max_variance_is_deterministic(self):
        estimator = WinProbabilityEstimator(
            EngineConfig(max_variance=0.0), SystemRandomSource(seed=1)
        )
        result = estimator.estimate_win_probability(1.0, 3.0)
        assert result.prob_a == pytest.approx(0.25)


# ── Clamping ─────────────────────────────────────────────────────────

class TestClamp:
    def test_clamped_to_ceiling(self):
        result = _make_estimator().estimate_win_probability(100.0, 1.0)
        assert result.prob_a == pytest.approx(0.85)
        assert result.prob_b == pytest.approx(0.15)
        assert result.clamped
        assert result.raw_prob_a == pytest.approx(100 / 101)

    def test_clamped_to_floor(self):
        result = _make_estimator().estimate_win_probability(1.0, 100.0)
        assert result.prob_a == pytest.approx(0.15)
        assert result.prob_b == pytest.approx(0.85)

    def test_one_zero_rating_is_clamped(self):
        result = _make_estimator().estimate_win_probability(2.0, 0.0)
        assert result.prob_a == pytest.approx(0.85)

    def test_band_follows_config(self):
        result = _make_estimator(
            probability_floor=0.05, probability_ceiling=0.95, implied_ceiling=0.99
        ).estimate_win_probability(100.0, 1.0)
        assert result.prob_a == pytest.approx(0.95)

    @pytest.mark.parametrize(
        "rating_a, rating_b",
        [(18.0, 0.00896), (0.00896, 18.0), (1.0, 1.0), (2.3, 0.7), (0.0014, 0.0014)],
    )
    def test_probabilities_stay_in_band_and_sum_to_one(self, rating_a, rating_b):
        estimator = WinProbabilityEstimator(EngineConfig(), SystemRandomSource(seed=3))
        result = estimator.estimate_win_probability(rating_a, rating_b)
        assert 0.15 <= result.prob_a <= 0.85
        assert 0.15 <= result.prob_b <= 0.85
        assert result.prob_a + result.prob_b == pytest.approx(1.0, abs=1e-12)


class TestInvalidRatings:
    @pytest.mark.parametrize(
        "rating_a, rating_b",
        [(float("nan"), 1.0), (1.0, float("nan")), (float("inf"), 1.0), (1.0, float("-inf"))],
    )
    def test_non_finite_rating_raises(self, rating_a, rating_b):
        with pytest.raises(ContractViolationError, match="finite"):
            _make_estimator().estimate_win_probability(rating_a, rating_b)
