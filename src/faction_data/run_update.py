"""Rebuild factions.json from a faction ranking CSV export.

Usage:
    python -m src.faction_data.run_update <csv_file> [output_json]

Examples:
    python -m src.faction_data.run_update exports/factions.csv
    python -m src.faction_data.run_update exports/factions.csv /tmp/factions.json
"""

import logging
import sys
from pathlib import Path

from src.faction_data.config import FACTIONS_FILE
from src.faction_data.ingestion import (
    FactionIngester,
    summarize_factions,
    write_factions_json,
)
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_update(csv_file: Path, output_file: Path | None = None) -> Path:
    """Ingest *csv_file* and write the faction store file.

    Returns:
        Path to the written JSON file.

    Raises:
        IngestionError: If the export cannot be read.
    """
    if output_file is None:
        output_file = FACTIONS_FILE

    logger.info("Step 1/3: Ingesting %s...", csv_file)
    df = FactionIngester(csv_file).read_factions()

    logger.info("Step 2/3: Summarizing...")
    summary = summarize_factions(df)

    logger.info("Step 3/3: Writing %s...", output_file)
    output = write_factions_json(df, output_file)

    logger.info("Update complete! Output: %s", output)
    logger.info("  Total factions: %d", summary["total_factions"])
    logger.info("  Average respect: %s", f"{summary['average_respect']:,}")
    logger.info(
        "  By rank: %s",
        ", ".join(f"{k}={v}" for k, v in sorted(summary["rank_distribution"].items())),
    )
    logger.info(
        "  By members: %s",
        ", ".join(f"{k}={v}" for k, v in summary["member_count_distribution"].items()),
    )
    return output


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    csv_file = Path(sys.argv[1])
    output_file = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_update(csv_file, output_file)
        print(f"Faction update complete: {output}")
    except Exception:
        logger.exception("Faction update failed")
        sys.exit(1)
