"""Faction lookup store - JSON-backed faction snapshots with a TTL cache."""

import json
import logging
import math
import threading
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from src.faction_data.config import CACHE_TTL_SECONDS, FACTIONS_FILE
from src.odds_engine.calculator import FactionSource
from src.odds_engine.models import FactionId, FactionSnapshot

logger = logging.getLogger(__name__)


def _parse_number(value) -> Optional[float]:
    """Parse a number that may arrive as a comma-formatted string.

    Returns None for missing, blank, non-numeric or non-finite values
    (NaN, infinity, or anything that overflows a float).
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        value = str(value).replace(",", "").strip().strip('"')
        if not value:
            return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _parse_int(value) -> Optional[int]:
    number = _parse_number(value)
    return None if number is None else int(number)


def snapshot_from_record(record: Dict) -> FactionSnapshot:
    """Build a :class:`FactionSnapshot` from a raw faction record.

    Values are coerced but not defaulted; the power rating calculator
    applies defaults for anything missing.
    """
    rank = record.get("rank")
    return FactionSnapshot(
        id=str(record["id"]),
        name=record.get("name") or "Unknown Faction",
        respect=_parse_number(record.get("respect")),
        rank=str(rank).strip() if rank else None,
        members=_parse_int(record.get("members")),
        position=_parse_int(record.get("position")),
    )


class FactionStore(FactionSource):
    """Serves faction snapshots from ``factions.json``.

    File format::

        {"lastUpdated": "...", "factions": [{"id": 8468, "name": ..., ...}]}

    Lookups are cached for *cache_ttl* seconds. The cache is guarded by a
    lock so one store can be shared between threads.
    """

    def __init__(
        self,
        factions_file: Optional[Path] = None,
        cache_ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.factions_file = Path(factions_file) if factions_file else FACTIONS_FILE
        self.cache_ttl = cache_ttl
        self._clock = clock
        self._records: Optional[Dict[str, Dict]] = None
        self._cache: Dict[str, tuple] = {}
        self._lock = threading.Lock()
        self.last_updated: Optional[str] = None

    @classmethod
    def from_records(cls, records: Iterable[Dict], **kwargs) -> "FactionStore":
        """Build a store from in-memory records instead of a file."""
        store = cls(**kwargs)
        store._records = {str(r["id"]): r for r in records}
        return store

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """(Re)load faction records from disk.

        Returns:
            True if the file was read, False if it was missing or corrupt
            (the store is then empty).
        """
        records: Dict[str, Dict] = {}
        loaded = False

        if not self.factions_file.exists():
            logger.warning("Factions file not found: %s", self.factions_file)
        else:
            try:
                with open(self.factions_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                for record in data.get("factions", []):
                    if record.get("id") is None:
                        continue
                    records[str(record["id"])] = record
                self.last_updated = data.get("lastUpdated")
                loaded = True
                logger.info(
                    "Loaded %d factions from %s", len(records), self.factions_file
                )
            except (json.JSONDecodeError, OSError, AttributeError) as e:
                logger.warning("Corrupt factions file %s: %s", self.factions_file, e)

        with self._lock:
            self._records = records
            self._cache.clear()
        return loaded

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_faction(self, faction_id: FactionId) -> Optional[FactionSnapshot]:
        """Return the snapshot for *faction_id*, or None if unknown."""
        if self._records is None:
            self.load()

        key = str(faction_id)
        now = self._clock()

        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                snapshot, stored_at = cached
                if now - stored_at < self.cache_ttl:
                    return snapshot
                del self._cache[key]

            record = self._records.get(key)
            if record is None:
                logger.warning("Faction %s not found in faction data", faction_id)
                return None

            snapshot = snapshot_from_record(record)
            self._cache[key] = (snapshot, now)
            return snapshot

    def put(self, snapshot: FactionSnapshot):
        """Insert or replace a faction, e.g. after a fresh API fetch."""
        if self._records is None:
            self.load()
        key = str(snapshot.id)
        with self._lock:
            self._records[key] = {
                "id": snapshot.id,
                "name": snapshot.name,
                "respect": snapshot.respect,
                "rank": snapshot.rank,
                "members": snapshot.members,
                "position": snapshot.position,
            }
            self._cache[key] = (snapshot, self._clock())

    def clear_cache(self):
        with self._lock:
            self._cache.clear()
        logger.info("Faction cache cleared")

    @property
    def faction_count(self) -> int:
        return len(self._records or {})

    def stats(self) -> Dict:
        return {
            "factions_loaded": self.faction_count,
            "cache_size": len(self._cache),
            "cache_ttl": self.cache_ttl,
            "last_updated": self.last_updated,
        }
