"""CSV export of the bet ledger for spreadsheet mirrors."""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from src.bet_tracker.config import (
    ACTIVE_BET_COLUMNS,
    EXPORT_DIR,
    STATUS_CONFIRMED,
    STATUS_LOST,
    STATUS_PENDING,
    STATUS_WON,
)
from src.bet_tracker.ledger import BetLedger

logger = logging.getLogger(__name__)

USER_SUMMARY_COLUMNS = [
    "player_id", "username", "total_bets", "total_volume", "won_bets",
    "lost_bets", "total_winnings", "total_losses", "net_profit", "win_rate",
    "average_bet_size", "largest_bet", "favorite_faction",
]


def _most_common(values: pd.Series):
    counts = values.value_counts()
    return counts.index[0] if not counts.empty else None


def build_user_summary(bets: pd.DataFrame) -> pd.DataFrame:
    """Per-player totals from a DataFrame of bets (active and completed).

    ``net_profit`` is from the player's side: winnings minus lost stakes.
    ``win_rate`` is a percentage of settled bets, 0 when none are settled.
    """
    if bets.empty:
        return pd.DataFrame(columns=USER_SUMMARY_COLUMNS)

    bets = bets.copy()
    bets["player_id"] = bets["player_id"].astype(str)
    bets["won"] = bets["status"] == STATUS_WON
    bets["lost"] = bets["status"] == STATUS_LOST
    bets["winnings"] = (bets["payout"] - bets["stake"]).where(bets["won"], 0)
    bets["losses"] = bets["stake"].where(bets["lost"], 0)

    grouped = bets.groupby("player_id", sort=True)
    summary = grouped.agg(
        username=("username", "last"),
        total_bets=("bet_id", "count"),
        total_volume=("stake", "sum"),
        won_bets=("won", "sum"),
        lost_bets=("lost", "sum"),
        total_winnings=("winnings", "sum"),
        total_losses=("losses", "sum"),
        average_bet_size=("stake", "mean"),
        largest_bet=("stake", "max"),
        favorite_faction=("faction_name", _most_common),
    ).reset_index()

    settled = summary["won_bets"] + summary["lost_bets"]
    summary["net_profit"] = summary["total_winnings"] - summary["total_losses"]
    summary["win_rate"] = (
        (summary["won_bets"] / settled.where(settled > 0) * 100).fillna(0).round(1)
    )
    summary["average_bet_size"] = summary["average_bet_size"].round(2)
    summary[["won_bets", "lost_bets"]] = summary[["won_bets", "lost_bets"]].astype(int)

    return summary[USER_SUMMARY_COLUMNS]


def export_bets_csv(ledger: BetLedger, export_dir: Optional[Path] = None) -> Dict[str, Path]:
    """Write ``active-bets.csv`` and ``user-summary.csv``.

    Returns:
        Dict mapping ``"active_bets"`` and ``"user_summary"`` to file paths.
    """
    export_dir = Path(export_dir) if export_dir else EXPORT_DIR
    export_dir.mkdir(parents=True, exist_ok=True)

    all_bets = ledger.get_all_bets()
    active = pd.DataFrame(
        [asdict(b) for b in all_bets["active_bets"]], columns=ACTIVE_BET_COLUMNS
    )
    everything = pd.DataFrame(
        [asdict(b) for b in all_bets["active_bets"] + all_bets["completed_bets"]]
    )

    active_path = export_dir / "active-bets.csv"
    active.to_csv(active_path, index=False)
    logger.info(
        "Generated %s with %d bets (%d confirmed, %d pending)",
        active_path.name,
        len(active),
        int((active["status"] == STATUS_CONFIRMED).sum()),
        int((active["status"] == STATUS_PENDING).sum()),
    )

    summary = build_user_summary(everything)
    summary_path = export_dir / "user-summary.csv"
    summary.to_csv(summary_path, index=False)
    logger.info("Generated %s with %d users", summary_path.name, len(summary))

    return {"active_bets": active_path, "user_summary": summary_path}
