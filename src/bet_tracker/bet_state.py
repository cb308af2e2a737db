"""Bet data models."""

import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Collection, Optional, Union

from src.bet_tracker.config import BET_ID_ALPHABET, BET_ID_LENGTH, STATUS_PENDING

Id = Union[str, int]


def generate_bet_id(existing: Collection[str] = ()) -> str:
    """Random 8-character bet id not present in *existing*."""
    while True:
        bet_id = "".join(secrets.choice(BET_ID_ALPHABET) for _ in range(BET_ID_LENGTH))
        if bet_id not in existing:
            return bet_id


@dataclass
class Bet:
    """A single wager on one side of a faction war."""

    bet_id: str
    player_id: Id
    war_id: Id
    faction_id: Id
    faction_name: str
    stake: float
    odds: float
    potential_payout: int
    status: str
    placed_at: str
    username: Optional[str] = None
    confirmed_at: Optional[str] = None
    log_id: Optional[str] = None
    sender_id: Optional[Id] = None
    settled_at: Optional[str] = None
    payout: int = 0  # Paid out on settlement (0 for a lost bet)

    @classmethod
    def create(
        cls,
        player_id: Id,
        war_id: Id,
        faction_id: Id,
        faction_name: str,
        stake: float,
        odds: float,
        potential_payout: int,
        username: Optional[str] = None,
        existing_ids: Collection[str] = (),
    ) -> "Bet":
        return cls(
            bet_id=generate_bet_id(existing_ids),
            player_id=player_id,
            war_id=war_id,
            faction_id=faction_id,
            faction_name=faction_name,
            stake=stake,
            odds=odds,
            potential_payout=potential_payout,
            status=STATUS_PENDING,
            placed_at=datetime.now(timezone.utc).isoformat(),
            username=username,
        )


@dataclass
class BetStatistics:
    """Running totals across the whole ledger."""

    total_bets: int = 0
    total_volume: float = 0
    pending_bets: int = 0
    confirmed_bets: int = 0
    won_bets: int = 0
    lost_bets: int = 0
    total_payouts: float = 0
    total_profit: float = 0  # House profit: lost stakes minus winnings paid
    last_updated: Optional[str] = None
