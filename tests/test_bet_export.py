"""Tests for the spreadsheet CSV export."""

import pandas as pd
import pytest

from src.bet_tracker.config import ACTIVE_BET_COLUMNS
from src.bet_tracker.export import (
    USER_SUMMARY_COLUMNS,
    build_user_summary,
    export_bets_csv,
)
from src.bet_tracker.ledger import BetLedger


# ── Helpers ──────────────────────────────────────────────────────────

def _make_ledger(tmp_path):
    ledger = BetLedger(tmp_path / "bets.json")

    def place(player, faction, stake, odds, confirm=True):
        bet = ledger.place_bet(
            player, "W1", faction, f"Faction {faction}", stake, odds,
            username=f"user_{player}",
        )
        if confirm:
            ledger.confirm_bet(bet.bet_id, f"log-{bet.bet_id}")
        return bet

    place("p1", "A", 2, 2.5)
    place("p2", "B", 4, 1.5)
    place("p3", "A", 1, 2.5, confirm=False)
    ledger.settle_war("W1", "A")
    return ledger


# ── User summary ─────────────────────────────────────────────────────

class TestBuildUserSummary:
    def test_empty(self):
        summary = build_user_summary(pd.DataFrame())
        assert summary.empty
        assert list(summary.columns) == USER_SUMMARY_COLUMNS

    def test_per_player_totals(self):
        bets = pd.DataFrame(
            [
                {"bet_id": "1", "player_id": "p1", "username": "a", "faction_name": "X",
                 "stake": 2, "status": "won", "payout": 5},
                {"bet_id": "2", "player_id": "p1", "username": "a", "faction_name": "X",
                 "stake": 3, "status": "lost", "payout": 0},
                {"bet_id": "3", "player_id": "p1", "username": "a", "faction_name": "Y",
                 "stake": 1, "status": "pending", "payout": 0},
            ]
        )
        row = build_user_summary(bets).iloc[0]
        assert row["total_bets"] == 3
        assert row["total_volume"] == 6
        assert row["won_bets"] == 1
        assert row["lost_bets"] == 1
        assert row["total_winnings"] == 3
        assert row["total_losses"] == 3
        assert row["net_profit"] == 0
        assert row["win_rate"] == pytest.approx(50.0)
        assert row["average_bet_size"] == pytest.approx(2.0)
        assert row["largest_bet"] == 3
        assert row["favorite_faction"] == "X"

    def test_no_settled_bets_has_zero_win_rate(self):
        bets = pd.DataFrame(
            [{"bet_id": "1", "player_id": 7, "username": None, "faction_name": "X",
              "stake": 2, "status": "pending", "payout": 0}]
        )
        row = build_user_summary(bets).iloc[0]
        assert row["player_id"] == "7"
        assert row["win_rate"] == 0


# ── Export ───────────────────────────────────────────────────────────

class TestExportBetsCsv:
    def test_writes_both_files(self, tmp_path):
        paths = export_bets_csv(_make_ledger(tmp_path), tmp_path / "export")
        assert paths["active_bets"].name == "active-bets.csv"
        assert paths["user_summary"].name == "user-summary.csv"
        assert paths["active_bets"].exists()
        assert paths["user_summary"].exists()

    def test_active_bets_only_lists_open_bets(self, tmp_path):
        paths = export_bets_csv(_make_ledger(tmp_path), tmp_path / "export")
        active = pd.read_csv(paths["active_bets"])
        assert list(active.columns) == ACTIVE_BET_COLUMNS
        assert list(active["player_id"]) == ["p3"]
        assert list(active["status"]) == ["pending"]

    def test_user_summary_covers_settled_bets(self, tmp_path):
        paths = export_bets_csv(_make_ledger(tmp_path), tmp_path / "export")
        summary = pd.read_csv(paths["user_summary"]).set_index("player_id")

        assert list(summary.index) == ["p1", "p2", "p3"]
        assert summary.loc["p1", "net_profit"] == 3
        assert summary.loc["p1", "win_rate"] == pytest.approx(100.0)
        assert summary.loc["p2", "net_profit"] == -4
        assert summary.loc["p2", "win_rate"] == pytest.approx(0.0)
        assert summary.loc["p3", "total_bets"] == 1
        assert summary.loc["p1", "username"] == "user_p1"

    def test_empty_ledger(self, tmp_path):
        ledger = BetLedger(tmp_path / "bets.json")
        paths = export_bets_csv(ledger, tmp_path / "export")
        assert pd.read_csv(paths["active_bets"]).empty
        assert pd.read_csv(paths["user_summary"]).empty
