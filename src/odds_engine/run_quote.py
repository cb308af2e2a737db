"""Quote a faction matchup from the command line.

Usage:
    python -m src.odds_engine.run_quote <faction_a> <faction_b> [profile] [factions_file]

Examples:
    python -m src.odds_engine.run_quote 8468 16628
    python -m src.odds_engine.run_quote 8468 16628 decimal data/factions.json
"""

import json
import logging
import sys
from pathlib import Path

from src.faction_data.store import FactionStore
from src.logging_config import setup_logging
from src.odds_engine.calculator import OddsCalculator
from src.odds_engine.config import DEFAULT_PROFILE
from src.odds_engine.models import EngineConfig, OddsQuote

logger = logging.getLogger(__name__)


def run_quote(
    faction_a: str,
    faction_b: str,
    profile: str = DEFAULT_PROFILE,
    factions_file: Path | None = None,
) -> OddsQuote:
    config = EngineConfig.from_profile(profile)
    store = FactionStore(factions_file)
    store.load()
    calculator = OddsCalculator(store, config)
    return calculator.calculate_odds(faction_a, faction_b)


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)

    profile = sys.argv[3] if len(sys.argv) > 3 else DEFAULT_PROFILE
    factions_file = Path(sys.argv[4]) if len(sys.argv) > 4 else None

    try:
        quote = run_quote(sys.argv[1], sys.argv[2], profile, factions_file)
        print(json.dumps(quote.to_dict(), indent=2))
    except Exception:
        logger.exception("Odds calculation failed")
        sys.exit(1)
