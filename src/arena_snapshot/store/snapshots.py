from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol, Sequence, Tuple

from ..core.models import SnapshotRecord
from ..errors import PersistError

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "lm_arena_leaderboard_snapshots"

# Column form of SnapshotRecord.natural_key
NATURAL_KEY_COLUMNS = ("arena", "scraped_at", "model_name", "rank_position")


class SnapshotStore(Protocol):
    def upsert(self, rows: List[Dict[str, Any]], on_conflict: Sequence[str]) -> None: ...


class SupabaseStore:
    """Writes to a Supabase (PostgREST) table with a service-role client."""

    def __init__(self, client, table: str = DEFAULT_TABLE):
        self.client = client
        self.table = table

    @classmethod
    def connect(cls, url: str, key: str, table: str = DEFAULT_TABLE) -> "SupabaseStore":
        from supabase import create_client

        return cls(create_client(url, key), table)

    def upsert(self, rows: List[Dict[str, Any]], on_conflict: Sequence[str]) -> None:
        from supabase import PostgrestAPIError

        try:
            self.client.table(self.table).upsert(rows, on_conflict=",".join(on_conflict)).execute()
        except PostgrestAPIError as exc:
            raise PersistError(f"upsert into {self.table} failed: {exc.message or exc}") from exc


class MemoryStore:
    """In-process table keyed on the conflict columns. Used for dry runs."""

    def __init__(self):
        self.rows: Dict[Tuple[Any, ...], Dict[str, Any]] = {}

    def upsert(self, rows: List[Dict[str, Any]], on_conflict: Sequence[str]) -> None:
        for row in rows:
            self.rows[tuple(row[c] for c in on_conflict)] = dict(row)

    def __len__(self) -> int:
        return len(self.rows)


class SnapshotPersister:
    def __init__(self, store: SnapshotStore, conflict_columns: Sequence[str] = NATURAL_KEY_COLUMNS):
        self.store = store
        self.conflict_columns = tuple(conflict_columns)

    def persist(self, batch: List[SnapshotRecord]) -> int:
        """Upsert one category's batch on the natural key; returns rows written."""
        if not batch:
            return 0
        self.store.upsert([r.to_row() for r in batch], self.conflict_columns)
        logger.debug("upserted %d rows for %s", len(batch), batch[0].category)
        return len(batch)
