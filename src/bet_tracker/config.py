from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data files
DATA_DIR = PROJECT_ROOT / "data"
BETS_FILE = DATA_DIR / "bets.json"
EXPORT_DIR = DATA_DIR / "sheets-export"

# Bet ids: 8 characters from A-Z0-9
BET_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
BET_ID_LENGTH = 8

# Bet lifecycle
STATUS_PENDING = "pending"      # Placed, stake not yet seen in the logs
STATUS_CONFIRMED = "confirmed"  # Stake received
STATUS_WON = "won"
STATUS_LOST = "lost"

LEDGER_VERSION = "1.0"

# Export column order
ACTIVE_BET_COLUMNS = [
    "player_id", "username", "bet_id", "war_id", "faction_id", "faction_name",
    "stake", "odds", "potential_payout", "status", "placed_at", "confirmed_at",
]
