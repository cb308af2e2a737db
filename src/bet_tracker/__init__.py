from src.bet_tracker.bet_state import Bet, BetStatistics
from src.bet_tracker.export import build_user_summary, export_bets_csv
from src.bet_tracker.ledger import BetError, BetLedger

__all__ = [
    "Bet",
    "BetError",
    "BetLedger",
    "BetStatistics",
    "build_user_summary",
    "export_bets_csv",
]
