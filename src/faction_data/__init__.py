from src.faction_data.ingestion import (
    FactionIngester,
    IngestionError,
    summarize_factions,
    write_factions_json,
)
from src.faction_data.store import FactionStore, snapshot_from_record

__all__ = [
    "FactionIngester",
    "FactionStore",
    "IngestionError",
    "snapshot_from_record",
    "summarize_factions",
    "write_factions_json",
]
