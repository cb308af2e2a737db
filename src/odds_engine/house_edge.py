"""House edge (overround) application."""

import logging

from src.odds_engine.errors import ConfigurationError, ContractViolationError
from src.odds_engine.models import HouseEdgeResult

logger = logging.getLogger(__name__)


def apply_house_edge(
    prob_a: float,
    prob_b: float,
    edge_fraction: float,
    implied_ceiling: float = 1.0,
) -> HouseEdgeResult:
    """Inflate true probabilities by ``1 + edge_fraction``.

    If the larger implied probability exceeds *implied_ceiling*, both sides
    are scaled down by the same factor, which keeps their ratio intact but
    means the realized edge can fall short of *edge_fraction*.

    Args:
        prob_a: True probability of side A, in (0, 1).
        prob_b: True probability of side B, in (0, 1).
        edge_fraction: Target overround, e.g. ``0.06`` for 6%.
        implied_ceiling: Largest implied probability allowed.

    Returns:
        :class:`HouseEdgeResult` with ``realized_edge = implied_a + implied_b - 1``.

    Raises:
        ConfigurationError: If *edge_fraction* is negative.
        ContractViolationError: If a probability lies outside (0, 1).
    """
    if edge_fraction < 0:
        raise ConfigurationError(
            f"House edge must be non-negative, got {edge_fraction}"
        )
    for label, prob in (("A", prob_a), ("B", prob_b)):
        if not 0 < prob < 1:
            raise ContractViolationError(
                f"True probability for side {label} must lie in (0, 1), got {prob}"
            )

    overround = 1 + edge_fraction
    implied_a = prob_a * overround
    implied_b = prob_b * overround

    scaled = False
    max_implied = max(implied_a, implied_b)
    if max_implied > implied_ceiling:
        scale = implied_ceiling / max_implied
        implied_a *= scale
        implied_b *= scale
        scaled = True

    realized_edge = (implied_a + implied_b) - 1

    if scaled:
        logger.info(
            "Implied ceiling %.2f hit: realized edge %.2f%% (target %.2f%%)",
            implied_ceiling, realized_edge * 100, edge_fraction * 100,
        )

    return HouseEdgeResult(
        implied_a=implied_a,
        implied_b=implied_b,
        realized_edge=realized_edge,
        scaled=scaled,
    )
