"""CSV ingestion for faction ranking exports.

Handles the quirks of spreadsheet exports:
- Header names in varying case, with stray whitespace or aliases
- Comma-formatted numbers (e.g., "12,345,678")
- Blank rows and rows without a faction id
- The same faction exported twice (the last row wins)
"""

import json
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

import pandas as pd

from src.faction_data.config import (
    COLUMN_ALIASES,
    MEMBER_COUNT_BINS,
    MEMBER_COUNT_LABELS,
    NUMERIC_COLUMNS,
    REQUIRED_COLUMNS,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a faction export cannot be ingested."""


def _parse_numeric(value):
    """Parse a numeric string that may contain commas (e.g., '1,234' -> 1234.0).

    Blank, non-numeric and non-finite values ('inf', '1e999') become NaN.
    """
    if pd.isna(value):
        return float("nan")
    if not isinstance(value, (int, float)):
        value = str(value).replace(",", "").strip().strip('"')
        if value == "":
            return float("nan")
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return float("nan")
    return number if math.isfinite(number) else float("nan")


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and val != val:
        return default
    return val


def _faction_id(val):
    """Numeric ids stay numeric in the JSON output, anything else is a string."""
    s = str(val).strip()
    return int(s) if s.isdigit() else s


class FactionIngester:
    """Reads a faction ranking CSV export into a clean DataFrame.

    The returned DataFrame has exactly the columns in ``REQUIRED_COLUMNS``
    with ``respect``, ``members`` and ``position`` parsed as floats (NaN
    where missing).
    """

    def __init__(self, csv_path: Path):
        self.csv_path = Path(csv_path)

    def read_factions(self) -> pd.DataFrame:
        if not self.csv_path.exists():
            raise IngestionError(f"Expected file not found: {self.csv_path}")

        logger.info("Reading faction export: %s", self.csv_path.name)
        try:
            df = pd.read_csv(self.csv_path, dtype=str, quotechar='"')
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise IngestionError(f"Failed to read {self.csv_path}: {e}") from e

        df.columns = [
            COLUMN_ALIASES.get(col.strip().lower(), col.strip().lower())
            for col in df.columns
        ]
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise IngestionError(
                f"{self.csv_path.name} is missing required columns: {', '.join(missing)}"
            )
        df = df[REQUIRED_COLUMNS].copy()

        for col in ("id", "name", "rank"):
            df[col] = df[col].str.strip('"').str.strip()

        # Drop rows with no faction id (blank or placeholder rows)
        df = df[df["id"].notna() & (df["id"] != "")]

        for col in NUMERIC_COLUMNS:
            df[col] = df[col].apply(_parse_numeric)

        before = len(df)
        df = df.drop_duplicates(subset=["id"], keep="last").reset_index(drop=True)
        if len(df) < before:
            logger.warning(
                "Dropped %d duplicate faction rows (kept the last of each)",
                before - len(df),
            )

        logger.info("Loaded %d factions", len(df))
        return df


def factions_to_records(df: pd.DataFrame) -> list:
    """Convert a factions DataFrame to JSON-serializable records."""
    records = []
    for _, row in df.iterrows():
        respect = _safe(row.get("respect"))
        members = _safe(row.get("members"))
        position = _safe(row.get("position"))
        records.append(
            {
                "id": _faction_id(row["id"]),
                "name": _safe(row.get("name"), "Unknown Faction"),
                "respect": int(respect) if respect is not None else None,
                "rank": _safe(row.get("rank")),
                "members": int(members) if members is not None else None,
                "position": int(position) if position is not None else None,
            }
        )
    return records


def write_factions_json(df: pd.DataFrame, output_file: Path) -> Path:
    """Write *df* in the format read by :class:`FactionStore`."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
        "factions": factions_to_records(df),
    }
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    logger.info("Wrote %d factions to %s", len(data["factions"]), output_file)
    return output_file


def summarize_factions(df: pd.DataFrame) -> Dict:
    """Aggregate statistics over a factions DataFrame.

    Returns:
        Dict with ``total_factions``, ``total_respect``, ``average_respect``,
        ``rank_distribution`` and ``member_count_distribution``.
    """
    total = len(df)
    total_respect = float(df["respect"].fillna(0).sum())

    rank_counts = df["rank"].fillna("Unknown").value_counts()

    member_ranges = pd.cut(
        df["members"].fillna(0),
        bins=MEMBER_COUNT_BINS,
        labels=MEMBER_COUNT_LABELS,
        right=False,
    )
    member_counts = member_ranges.value_counts().reindex(MEMBER_COUNT_LABELS, fill_value=0)

    return {
        "total_factions": total,
        "total_respect": total_respect,
        "average_respect": round(total_respect / total) if total else 0,
        "rank_distribution": {str(k): int(v) for k, v in rank_counts.items()},
        "member_count_distribution": {
            str(k): int(v) for k, v in member_counts.items()
        },
    }
