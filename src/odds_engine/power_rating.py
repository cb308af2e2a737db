"""Power rating calculator.

Turns a faction's raw attributes into a single strength score. The four
sub-scores are multiplied rather than summed, so a faction that is weak in
any one dimension is penalized overall.
"""

import logging
import math
from typing import Optional

from src.odds_engine import config as C
from src.odds_engine.models import EngineConfig, FactionSnapshot, PowerRatingBreakdown

logger = logging.getLogger(__name__)


def _is_positive_number(value) -> bool:
    """True for a finite number above zero, False for anything else."""
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False


class PowerRatingCalculator:
    """Compute power ratings from :class:`FactionSnapshot` values.

    Missing or non-positive attributes are silently replaced by the
    configured defaults; this never raises for bad faction data.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute_power_rating(self, faction: FactionSnapshot) -> float:
        return self.breakdown(faction).power_rating

    def breakdown(self, faction: FactionSnapshot) -> PowerRatingBreakdown:
        """Compute the rating together with each of its sub-scores."""
        respect_score = self._respect_score(faction.respect)
        rank_multiplier = self._rank_multiplier(faction.rank)
        position_multiplier = self._position_multiplier(faction.position)
        member_efficiency = self._member_efficiency(faction.members)

        power_rating = min(
            respect_score * rank_multiplier * position_multiplier * member_efficiency,
            C.MAX_POWER_RATING,
        )

        logger.debug(
            "Power rating for faction %s (%s): respect=%.3f rank=%.2f "
            "position=%.2f members=%.2f -> %.4f",
            faction.id, faction.name, respect_score, rank_multiplier,
            position_multiplier, member_efficiency, power_rating,
        )

        return PowerRatingBreakdown(
            respect_score=respect_score,
            rank_multiplier=rank_multiplier,
            position_multiplier=position_multiplier,
            member_efficiency=member_efficiency,
            power_rating=power_rating,
        )

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def _respect_score(self, respect: Optional[float]) -> float:
        """Respect in millions, raised to the configured weighting exponent.

        Zero, negative and non-finite values count as missing, so a faction
        always rates strictly positive and finite.
        """
        if not _is_positive_number(respect):
            respect = self.config.default_respect
        return (respect / C.RESPECT_SCALE) ** self.config.respect_exponent

    def _rank_multiplier(self, rank: Optional[str]) -> float:
        table = self.config.rank_multipliers
        if not isinstance(rank, str):
            return table[C.UNRANKED]
        return table.get(rank.strip(), table[C.UNRANKED])

    def _position_multiplier(self, position: Optional[int]) -> float:
        if not _is_positive_number(position):
            position = self.config.default_position
        for max_position, multiplier in self.config.position_breakpoints:
            if position <= max_position:
                return multiplier
        return self.config.deep_position_multiplier

    def _member_efficiency(self, members: Optional[int]) -> float:
        """Reward a full roster with diminishing returns.

        Formula for 1-49 members::

            efficiency = small_roster_base + members / 100 * small_roster_slope
        """
        if not _is_positive_number(members):
            return self.config.empty_roster_efficiency
        for min_members, efficiency in self.config.member_efficiency_steps:
            if members >= min_members:
                return efficiency
        return (
            self.config.small_roster_base
            + members / 100 * self.config.small_roster_slope
        )


def compute_power_rating(
    faction: FactionSnapshot,
    config: Optional[EngineConfig] = None,
) -> float:
    """Convenience wrapper around :class:`PowerRatingCalculator`."""
    return PowerRatingCalculator(config).compute_power_rating(faction)


DEFAULT_POWER_RATING = compute_power_rating(FactionSnapshot(id="default"))
