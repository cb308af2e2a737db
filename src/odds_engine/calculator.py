"""Odds calculator - composes the four pricing stages into a quote."""

import logging
import math
from datetime import datetime, timezone
from typing import Dict, Optional

from src.odds_engine import config as C
from src.odds_engine.errors import ContractViolationError
from src.odds_engine.house_edge import apply_house_edge
from src.odds_engine.models import (
    EngineConfig,
    FactionId,
    FactionSnapshot,
    OddsQuote,
    Payout,
    SideQuote,
)
from src.odds_engine.power_rating import PowerRatingCalculator
from src.odds_engine.quantizer import (
    calculate_payout,
    generate_betting_examples,
    snap_to_ladder,
    to_decimal_odds,
)
from src.odds_engine.win_probability import RandomSource, WinProbabilityEstimator

logger = logging.getLogger(__name__)


class FactionSource:
    """Interface for the faction lookup collaborator."""

    def get_faction(self, faction_id: FactionId) -> Optional[FactionSnapshot]:
        raise NotImplementedError

    def stats(self) -> Dict:
        return {}


class OddsCalculator:
    """Main entry point for pricing faction matchups.

    Pipeline::

        FactionSnapshot -> power rating -> win probability (variance, clamp)
            -> implied probability (house edge) -> decimal odds -> examples

    The calculator holds no per-call state, so one instance can serve
    concurrent requests as long as its faction source and random source
    are safe to share.
    """

    def __init__(
        self,
        faction_source: FactionSource,
        config: Optional[EngineConfig] = None,
        random_source: Optional[RandomSource] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.faction_source = faction_source
        self.config = config or EngineConfig.from_profile()
        self.log = log or logger
        self.power_ratings = PowerRatingCalculator(self.config)
        self.estimator = WinProbabilityEstimator(self.config, random_source)

        self.log.info(
            "Odds calculator ready (profile=%s, mode=%s, house edge=%.1f%%)",
            self.config.profile,
            self.config.odds_mode,
            self.config.house_edge * 100,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate_odds(self, faction_id_a: FactionId, faction_id_b: FactionId) -> OddsQuote:
        """Quote a matchup by faction id.

        If either faction cannot be found an even-money placeholder quote
        flagged ``fallback=True`` is returned instead of raising.

        Raises:
            ContractViolationError: If both ids name the same faction.
        """
        self._check_distinct(faction_id_a, faction_id_b)
        faction_a = self.faction_source.get_faction(faction_id_a)
        faction_b = self.faction_source.get_faction(faction_id_b)

        if faction_a is None or faction_b is None:
            self.log.warning(
                "Missing faction data (%s found=%s, %s found=%s), using fallback odds",
                faction_id_a, faction_a is not None,
                faction_id_b, faction_b is not None,
            )
            return self.fallback_quote(faction_id_a, faction_id_b)

        return self.quote(faction_a, faction_b)

    def quote(self, faction_a: FactionSnapshot, faction_b: FactionSnapshot) -> OddsQuote:
        """Price a matchup from two already-resolved snapshots."""
        self._check_distinct(faction_a.id, faction_b.id)
        rating_a = self.power_ratings.compute_power_rating(faction_a)
        rating_b = self.power_ratings.compute_power_rating(faction_b)

        probabilities = self.estimator.estimate_win_probability(rating_a, rating_b)
        implied = apply_house_edge(
            probabilities.prob_a,
            probabilities.prob_b,
            self.config.house_edge,
            self.config.implied_ceiling,
        )

        odds_a = self._quantize(implied.implied_a)
        odds_b = self._quantize(implied.implied_b)

        quote = OddsQuote(
            faction_a=SideQuote(
                faction_id=faction_a.id,
                name=faction_a.name,
                decimal_odds=odds_a,
                implied_probability=implied.implied_a,
                true_probability=probabilities.prob_a,
                power_rating=rating_a,
                betting_examples=self._examples(odds_a),
            ),
            faction_b=SideQuote(
                faction_id=faction_b.id,
                name=faction_b.name,
                decimal_odds=odds_b,
                implied_probability=implied.implied_b,
                true_probability=probabilities.prob_b,
                power_rating=rating_b,
                betting_examples=self._examples(odds_b),
            ),
            target_house_edge=self.config.house_edge,
            house_edge=implied.realized_edge,
            confidence=self._confidence(rating_a, rating_b),
            odds_mode=self.config.odds_mode,
            profile=self.config.profile,
            power_ratio=rating_a / rating_b if rating_b > 0 else None,
        )

        self.log.info(
            "%s vs %s: odds %.2f / %.2f (true %.1f%% / %.1f%%, edge %.2f%%, confidence %d)",
            faction_a.name, faction_b.name, odds_a, odds_b,
            probabilities.prob_a * 100, probabilities.prob_b * 100,
            implied.realized_edge * 100, quote.confidence,
        )
        if (
            self.config.odds_mode == C.ODDS_MODE_LADDER
            and quote.odds_overround < implied.realized_edge
        ):
            self.log.warning(
                "Snapped odds %.2f / %.2f carry %.2f%% overround, below the "
                "realized edge of %.2f%%",
                odds_a, odds_b, quote.odds_overround * 100, implied.realized_edge * 100,
            )
        return quote

    def fallback_quote(self, faction_id_a: FactionId, faction_id_b: FactionId) -> OddsQuote:
        """Even-money placeholder used when faction data is unavailable."""
        self._check_distinct(faction_id_a, faction_id_b)
        examples = self._examples(C.EVEN_MONEY)
        sides = [
            SideQuote(
                faction_id=faction_id,
                name="Unknown Faction",
                decimal_odds=C.EVEN_MONEY,
                implied_probability=0.5,
                true_probability=0.5,
                betting_examples=list(examples),
            )
            for faction_id in (faction_id_a, faction_id_b)
        ]
        return OddsQuote(
            faction_a=sides[0],
            faction_b=sides[1],
            target_house_edge=self.config.house_edge,
            house_edge=0.0,
            confidence=0,
            odds_mode=self.config.odds_mode,
            profile=self.config.profile,
            fallback=True,
        )

    def calculate_payout(self, stake: float, decimal_odds: float) -> Payout:
        return calculate_payout(stake, decimal_odds)

    def health_check(self) -> Dict:
        """Engine status for monitoring endpoints."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": C.ENGINE_VERSION,
            "profile": self.config.profile,
            "odds_format": "decimal",
            "odds_mode": self.config.odds_mode,
            "house_edge": f"{self.config.house_edge * 100:.1f}%",
            "probability_band": [
                self.config.probability_floor,
                self.config.probability_ceiling,
            ],
            "clean_odds_ladder": list(self.config.clean_odds_ladder),
            "stake_unit": self.config.stake_unit,
            "unit_value": self.config.unit_value,
            "faction_source": self.faction_source.stats(),
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_distinct(faction_id_a: FactionId, faction_id_b: FactionId):
        # Ids are compared as strings, so 1 and "1" are the same faction
        if str(faction_id_a) == str(faction_id_b):
            raise ContractViolationError(
                f"Cannot quote faction {faction_id_a} against itself"
            )

    def _quantize(self, implied_prob: float) -> float:
        odds = to_decimal_odds(implied_prob)
        if self.config.odds_mode == C.ODDS_MODE_LADDER:
            odds = snap_to_ladder(odds, self.config.clean_odds_ladder)
        return odds

    def _examples(self, decimal_odds: float):
        return generate_betting_examples(
            decimal_odds,
            stake_sizes=self.config.stake_sizes,
            max_examples=self.config.max_examples,
            unit_name=self.config.stake_unit,
            unit_value=self.config.unit_value,
        )

    @staticmethod
    def _confidence(rating_a: float, rating_b: float) -> int:
        """How lopsided the matchup is, 0 (coin flip) to 100.

        Formula::

            confidence = min(100, round(|ln(rating_a / rating_b)| * 30))
        """
        if rating_a <= 0 and rating_b <= 0:
            return 0
        if rating_a <= 0 or rating_b <= 0:
            return 100
        return min(100, round(abs(math.log(rating_a / rating_b)) * C.CONFIDENCE_SCALE))


def calculate_odds(
    faction_id_a: FactionId,
    faction_id_b: FactionId,
    faction_source: FactionSource,
    config: Optional[EngineConfig] = None,
    random_source: Optional[RandomSource] = None,
) -> OddsQuote:
    """One-shot convenience wrapper around :class:`OddsCalculator`."""
    calculator = OddsCalculator(faction_source, config, random_source)
    return calculator.calculate_odds(faction_id_a, faction_id_b)
