"""Tests for house edge application."""

import pytest

from src.odds_engine.errors import ConfigurationError, ContractViolationError
from src.odds_engine.house_edge import apply_house_edge


class TestApplyHouseEdge:
    def test_even_matchup(self):
        result = apply_house_edge(0.5, 0.5, 0.06)
        assert result.implied_a == pytest.approx(0.53)
        assert result.implied_b == pytest.approx(0.53)
        assert result.realized_edge == pytest.approx(0.06)
        assert not result.scaled

    def test_zero_edge_is_identity(self):
        result = apply_house_edge(0.7, 0.3, 0.0)
        assert result.implied_a == pytest.approx(0.7)
        assert result.implied_b == pytest.approx(0.3)
        assert result.realized_edge == pytest.approx(0.0)

    def test_implied_ceiling_scales_both_sides(self):
        result = apply_house_edge(0.85, 0.15, 0.06, implied_ceiling=0.90)
        assert result.scaled
        assert result.implied_a == pytest.approx(0.90)
        assert result.implied_a / result.implied_b == pytest.approx(0.85 / 0.15)
        # Scaling trims the edge below target: 0.90 / 0.85 - 1
        assert result.realized_edge == pytest.approx(0.0588235, abs=1e-6)

    def test_ceiling_applies_to_either_side(self):
        result = apply_house_edge(0.15, 0.85, 0.06, implied_ceiling=0.90)
        assert result.implied_b == pytest.approx(0.90)
        assert result.implied_a < result.implied_b

    def test_ceiling_not_hit(self):
        result = apply_house_edge(0.6, 0.4, 0.06, implied_ceiling=0.90)
        assert not result.scaled
        assert result.implied_a == pytest.approx(0.636)

    def test_realized_edge_matches_implied_sum(self):
        result = apply_house_edge(0.72, 0.28, 0.08, implied_ceiling=0.90)
        assert result.realized_edge == pytest.approx(
            result.implied_a + result.implied_b - 1
        )

    def test_negative_edge_raises(self):
        with pytest.raises(ConfigurationError):
            apply_house_edge(0.5, 0.5, -0.01)

    @pytest.mark.parametrize(
        "prob_a, prob_b", [(0.0, 1.0), (1.0, 0.0), (-0.2, 0.5), (0.5, 1.2)]
    )
    def test_probability_outside_open_interval_raises(self, prob_a, prob_b):
        with pytest.raises(ContractViolationError):
            apply_house_edge(prob_a, prob_b, 0.06)

    def test_error_kinds_are_distinct(self):
        assert not issubclass(ContractViolationError, ConfigurationError)
        assert not issubclass(ConfigurationError, ContractViolationError)
