"""Bet ledger - bet lifecycle persisted to a flat JSON file.

Lifecycle::

    place_bet -> pending -> confirm_bet -> confirmed -> settle_war -> won / lost

Settled bets move from ``active_bets`` to ``completed_bets``.
"""

import json
import logging
import threading
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from src.bet_tracker.bet_state import Bet, BetStatistics, Id
from src.bet_tracker.config import (
    BETS_FILE,
    LEDGER_VERSION,
    STATUS_CONFIRMED,
    STATUS_LOST,
    STATUS_PENDING,
    STATUS_WON,
)
from src.odds_engine.quantizer import calculate_payout

logger = logging.getLogger(__name__)

_BET_FIELDS = {f.name for f in fields(Bet)}


class BetError(Exception):
    """Raised when a bet request is invalid."""


@dataclass
class _LedgerData:
    active_bets: List[Bet] = field(default_factory=list)
    completed_bets: List[Bet] = field(default_factory=list)
    statistics: BetStatistics = field(default_factory=BetStatistics)
    metadata: Dict = field(default_factory=dict)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BetLedger:
    """Reads and writes the bet ledger file.

    Every operation is a load-modify-save cycle, serialized by a lock so a
    single ledger instance can be shared between threads.
    """

    def __init__(self, storage_file: Optional[Path] = None):
        self.storage_file = Path(storage_file) if storage_file else BETS_FILE
        self._lock = threading.Lock()
        self._ensure_file()

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------

    def place_bet(
        self,
        player_id: Id,
        war_id: Id,
        faction_id: Id,
        faction_name: str,
        stake: float,
        odds: float,
        username: Optional[str] = None,
    ) -> Bet:
        """Record a new pending bet.

        Raises:
            BetError: If required data is missing, the stake is not
                positive or the odds are not above 1.0.
        """
        if not player_id or not war_id or not faction_id:
            raise BetError("Missing required bet data (player_id, war_id, faction_id)")
        if not stake or stake <= 0:
            raise BetError(f"Invalid stake: {stake}")
        if not odds or odds <= 1.0:
            raise BetError(f"Invalid decimal odds: {odds}")

        payout = calculate_payout(stake, odds)

        with self._lock:
            data = self._load()
            existing = {b.bet_id for b in data.active_bets + data.completed_bets}
            bet = Bet.create(
                player_id=player_id,
                war_id=war_id,
                faction_id=faction_id,
                faction_name=faction_name,
                stake=stake,
                odds=odds,
                potential_payout=payout.total_return,
                username=username,
                existing_ids=existing,
            )
            data.active_bets.insert(0, bet)

            stats = data.statistics
            stats.total_bets += 1
            stats.total_volume += stake
            stats.pending_bets += 1
            self._save(data)

        logger.info(
            "Bet %s placed: player %s backs %s (%s) in war %s, %s @ %.2f -> %d",
            bet.bet_id, player_id, faction_name, faction_id, war_id,
            stake, odds, bet.potential_payout,
        )
        return bet

    def confirm_bet(
        self,
        bet_id: str,
        log_id: str,
        sender_id: Optional[Id] = None,
        confirmed_at: Optional[str] = None,
    ) -> bool:
        """Mark a pending bet as confirmed once its stake has been received.

        Returns:
            True if confirmed, False if the bet is unknown or not pending.
        """
        with self._lock:
            data = self._load()
            bet = self._find(data.active_bets, bet_id)
            if bet is None or bet.status != STATUS_PENDING:
                logger.warning("Bet %s not found or already confirmed", bet_id)
                return False

            bet.status = STATUS_CONFIRMED
            bet.log_id = log_id
            bet.sender_id = sender_id
            bet.confirmed_at = confirmed_at or _now()

            data.statistics.pending_bets -= 1
            data.statistics.confirmed_bets += 1
            self._save(data)

        logger.info("Bet %s confirmed (log %s)", bet_id, log_id)
        return True

    def settle_war(self, war_id: Id, winning_faction_id: Id) -> List[Bet]:
        """Settle every confirmed bet on *war_id*.

        Bets on *winning_faction_id* are won and pay their potential payout;
        all other confirmed bets are lost. Pending bets are left as they are.

        Returns:
            The bets settled by this call.
        """
        settled: List[Bet] = []
        with self._lock:
            data = self._load()
            stats = data.statistics
            remaining: List[Bet] = []

            for bet in data.active_bets:
                if str(bet.war_id) != str(war_id) or bet.status != STATUS_CONFIRMED:
                    remaining.append(bet)
                    continue

                bet.settled_at = _now()
                if str(bet.faction_id) == str(winning_faction_id):
                    bet.status = STATUS_WON
                    bet.payout = bet.potential_payout
                    stats.won_bets += 1
                    stats.total_payouts += bet.payout
                    stats.total_profit -= bet.payout - bet.stake
                else:
                    bet.status = STATUS_LOST
                    bet.payout = 0
                    stats.lost_bets += 1
                    stats.total_profit += bet.stake
                stats.confirmed_bets -= 1
                settled.append(bet)

            if settled:
                data.active_bets = remaining
                data.completed_bets = settled + data.completed_bets
                self._save(data)

        won = sum(1 for b in settled if b.status == STATUS_WON)
        logger.info(
            "War %s settled for faction %s: %d bets (%d won, %d lost)",
            war_id, winning_faction_id, len(settled), won, len(settled) - won,
        )
        return settled

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_bet(self, bet_id: str) -> Optional[Bet]:
        data = self._load()
        return self._find(data.active_bets + data.completed_bets, bet_id)

    def get_user_bets(self, player_id: Id, include_completed: bool = False) -> List[Bet]:
        data = self._load()
        bets = data.active_bets + (data.completed_bets if include_completed else [])
        return [b for b in bets if str(b.player_id) == str(player_id)]

    def get_all_bets(self) -> Dict:
        data = self._load()
        return {
            "active_bets": data.active_bets,
            "completed_bets": data.completed_bets,
            "statistics": data.statistics,
        }

    @property
    def statistics(self) -> BetStatistics:
        return self._load().statistics

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _ensure_file(self):
        if self.storage_file.exists():
            return
        self.storage_file.parent.mkdir(parents=True, exist_ok=True)
        self._save(_LedgerData(metadata={"version": LEDGER_VERSION, "created": _now()}))
        logger.info("Initialized bet ledger at %s", self.storage_file)

    def _load(self) -> _LedgerData:
        try:
            with open(self.storage_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            # Refuse to continue rather than overwrite a damaged ledger
            raise BetError(f"Could not read bet ledger {self.storage_file}: {e}") from e

        stats = raw.get("statistics", {})
        return _LedgerData(
            active_bets=[self._dict_to_bet(b) for b in raw.get("active_bets", [])],
            completed_bets=[self._dict_to_bet(b) for b in raw.get("completed_bets", [])],
            statistics=BetStatistics(
                **{k: v for k, v in stats.items() if k in BetStatistics.__dataclass_fields__}
            ),
            metadata=raw.get("metadata", {}),
        )

    def _save(self, data: _LedgerData):
        now = _now()
        data.statistics.last_updated = now
        data.metadata["last_updated"] = now
        data.metadata["total_users"] = len(
            {str(b.player_id) for b in data.active_bets + data.completed_bets}
        )

        payload = {
            "active_bets": [asdict(b) for b in data.active_bets],
            "completed_bets": [asdict(b) for b in data.completed_bets],
            "statistics": asdict(data.statistics),
            "metadata": data.metadata,
        }
        with open(self.storage_file, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    @staticmethod
    def _dict_to_bet(record: Dict) -> Bet:
        return Bet(**{k: v for k, v in record.items() if k in _BET_FIELDS})

    @staticmethod
    def _find(bets: List[Bet], bet_id: str) -> Optional[Bet]:
        for bet in bets:
            if bet.bet_id == bet_id:
                return bet
        return None
