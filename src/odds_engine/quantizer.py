"""Odds quantizer and payout generator.

Converts implied probabilities into displayable decimal odds, optionally
snapped to a ladder of "clean" values, and projects stakes onto those odds.
"""

import logging
import math
from typing import Dict, List, Sequence

from src.odds_engine import config as C
from src.odds_engine.errors import ContractViolationError
from src.odds_engine.models import BettingExample, Payout

logger = logging.getLogger(__name__)

EXACT_RETURN_TOLERANCE = 1e-6


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def to_decimal_odds(implied_prob: float) -> float:
    """Convert an implied probability to decimal odds (2 dp).

    Raises:
        ContractViolationError: If *implied_prob* is outside (0, 1).
    """
    if not 0 < implied_prob < 1:
        raise ContractViolationError(
            f"Implied probability must lie in (0, 1), got {implied_prob}"
        )
    odds = round(1 / implied_prob, 2)
    # A probability just under 1 would otherwise round to even 1.00
    return max(odds, C.MIN_DECIMAL_ODDS)


def snap_to_ladder(decimal_odds: float, ladder: Sequence[float]) -> float:
    """Snap *decimal_odds* to the nearest value on *ladder*.

    Ties between two equidistant entries go to the one closer to even
    money (2.00); if that is also a tie the lower entry wins.
    """
    if not ladder:
        raise ContractViolationError("Cannot snap odds to an empty ladder")
    snapped = min(
        ladder,
        key=lambda entry: (
            round(abs(decimal_odds - entry), 9),
            round(abs(entry - C.EVEN_MONEY), 9),
            entry,
        ),
    )
    logger.debug("Snapped odds %.2f -> %.2f", decimal_odds, snapped)
    return snapped


def calculate_payout(stake: float, decimal_odds: float) -> Payout:
    """Total return and profit for a winning bet.

    Raises:
        ContractViolationError: If *stake* is not positive or *decimal_odds*
            is not above 1.0.
    """
    if not stake > 0:
        raise ContractViolationError(f"Invalid stake: {stake}")
    if not decimal_odds > 1.0:
        raise ContractViolationError(f"Invalid decimal odds: {decimal_odds}")

    total_return = round_half_up(stake * decimal_odds)
    return Payout(
        stake=stake,
        total_return=total_return,
        profit=total_return - stake,
        odds=decimal_odds,
    )


def _make_example(
    stake: int,
    decimal_odds: float,
    unit_name: str,
    unit_value: float,
    is_approximate: bool,
) -> BettingExample:
    payout = calculate_payout(stake, decimal_odds)
    cash_stake = round_half_up(stake * unit_value)
    approx = "~" if is_approximate else ""
    return BettingExample(
        stake=stake,
        total_return=payout.total_return,
        profit=payout.profit,
        is_approximate=is_approximate,
        cash_stake=cash_stake,
        cash_return=round_half_up(cash_stake * decimal_odds),
        description=(
            f"Bet {stake} {unit_name} -> Win {approx}{payout.total_return} "
            f"{unit_name} total ({approx}{payout.profit} profit)"
        ),
    )


def generate_betting_examples(
    decimal_odds: float,
    stake_sizes: Sequence[int] = C.STAKE_SIZES,
    max_examples: int = C.MAX_EXAMPLES,
    unit_name: str = C.STAKE_UNIT,
    unit_value: float = C.UNIT_VALUE,
) -> List[BettingExample]:
    """Example stakes for *decimal_odds*, preferring whole-unit returns.

    Only stakes whose return is a whole number of units are listed, up to
    *max_examples*. When none qualifies a single approximate example for
    the smallest stake is returned instead.
    """
    examples = []
    for stake in sorted(stake_sizes):
        exact_return = stake * decimal_odds
        if abs(exact_return - round_half_up(exact_return)) <= EXACT_RETURN_TOLERANCE:
            examples.append(
                _make_example(stake, decimal_odds, unit_name, unit_value, False)
            )
        if len(examples) >= max_examples:
            break

    if not examples:
        examples.append(
            _make_example(min(stake_sizes), decimal_odds, unit_name, unit_value, True)
        )

    return examples


def get_all_possible_bets(
    decimal_odds: float,
    max_stake: int = 10,
    unit_value: float = C.UNIT_VALUE,
) -> List[Dict]:
    """Every whole-unit stake up to *max_stake* with a (nearly) whole return."""
    if not decimal_odds > 1.0:
        raise ContractViolationError(f"Invalid decimal odds: {decimal_odds}")

    bets = []
    for stake in range(1, max_stake + 1):
        exact_return = stake * decimal_odds
        total_return = round_half_up(exact_return)
        if abs(exact_return - total_return) < C.WHOLE_RETURN_TOLERANCE:
            bets.append(
                {
                    "stake": stake,
                    "total_return": total_return,
                    "profit": total_return - stake,
                    "cash_stake": round_half_up(stake * unit_value),
                    "cash_return": round_half_up(total_return * unit_value),
                    "cash_profit": round_half_up((total_return - stake) * unit_value),
                }
            )
    return bets
