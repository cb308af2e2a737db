"""Win probability estimator.

The only stage of the pipeline that draws random numbers. The draw goes
through an injectable :class:`RandomSource` so tests can pin it.
"""

import logging
import math
import random
from typing import Optional

from src.odds_engine.errors import ContractViolationError
from src.odds_engine.models import EngineConfig, WinProbability

logger = logging.getLogger(__name__)


class RandomSource:
    """Interface for the variance draw: ``next_float() -> [0, 1)``."""

    def next_float(self) -> float:
        raise NotImplementedError


class SystemRandomSource(RandomSource):
    """Pseudo-random source backed by :class:`random.Random`."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def next_float(self) -> float:
        return self._rng.random()


class FixedRandomSource(RandomSource):
    """Always returns the same value. ``0.5`` injects zero variance."""

    def __init__(self, value: float = 0.5):
        if not 0 <= value < 1:
            raise ValueError(f"Fixed random value must lie in [0, 1), got {value}")
        self.value = value

    def next_float(self) -> float:
        return self.value


class WinProbabilityEstimator:
    """Convert two power ratings into complementary win probabilities."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        random_source: Optional[RandomSource] = None,
    ):
        self.config = config or EngineConfig()
        self.random_source = random_source or SystemRandomSource()

    def estimate_win_probability(self, rating_a: float, rating_b: float) -> WinProbability:
        """Estimate P(A wins) and P(B wins).

        Steps::

            p_a = rating_a / (rating_a + rating_b)
            p_a += (r - 0.5) * 2 * max_variance
            p_a = clamp(p_a, floor, ceiling)
            p_b = 1 - p_a

        Only side A is clamped; side B is derived from it so the pair
        always sums to exactly 1.

        Raises:
            ContractViolationError: If either rating is negative or not finite.
        """
        ratings_valid = all(
            math.isfinite(rating) and rating >= 0 for rating in (rating_a, rating_b)
        )
        if not ratings_valid:
            raise ContractViolationError(
                f"Power ratings must be finite and non-negative, got {rating_a} and {rating_b}"
            )

        total = rating_a + rating_b
        if total == 0:
            logger.warning("Both power ratings are zero, using 50/50 split")
            return WinProbability(prob_a=0.5, prob_b=0.5)

        raw_prob_a = rating_a / total
        variance = (self.random_source.next_float() - 0.5) * 2 * self.config.max_variance
        adjusted = raw_prob_a + variance

        floor = self.config.probability_floor
        ceiling = self.config.probability_ceiling
        prob_a = max(floor, min(ceiling, adjusted))
        clamped = prob_a != adjusted

        logger.debug(
            "Win probability: raw=%.4f variance=%+.4f adjusted=%.4f final=%.4f%s",
            raw_prob_a, variance, adjusted, prob_a, " (clamped)" if clamped else "",
        )

        return WinProbability(
            prob_a=prob_a,
            prob_b=1 - prob_a,
            raw_prob_a=raw_prob_a,
            variance=variance,
            clamped=clamped,
        )
