from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data files
DATA_DIR = PROJECT_ROOT / "data"
FACTIONS_FILE = DATA_DIR / "factions.json"

# Lookup cache lifetime (5 minutes)
CACHE_TTL_SECONDS = 300

# Columns expected in a faction ranking export (after normalization)
REQUIRED_COLUMNS = ["id", "name", "respect", "rank", "members", "position"]
NUMERIC_COLUMNS = ["respect", "members", "position"]

# Member count ranges used in faction statistics
MEMBER_COUNT_BINS = [0, 50, 75, 90, 100, float("inf")]
MEMBER_COUNT_LABELS = ["0-49", "50-74", "75-89", "90-99", "100+"]

# Alternative header names seen in exports -> canonical column
COLUMN_ALIASES = {
    "faction_id": "id",
    "faction id": "id",
    "faction": "name",
    "faction_name": "name",
    "member_count": "members",
    "rank_name": "rank",
    "ranking": "position",
}
