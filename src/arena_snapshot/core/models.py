from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class RenderedRow(BaseModel):
    cells: List[str]
    link_text: Optional[str] = None  # text of the first <a href> in the row


class RowClass(str, Enum):
    DATA = "data"
    REJECTED = "rejected"


class LeaderboardRecord(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    rank_position: Optional[int] = None
    model_name: str
    organization: Optional[str] = None
    overall_score: float
    votes: Optional[int] = None
    license: Optional[str] = None


class SnapshotRecord(LeaderboardRecord):
    """A leaderboard record with provenance, ready for persistence."""

    model_config = ConfigDict(frozen=True)

    rank_position: int
    category: str
    scraped_at: datetime
    source_url: str
    row_raw: Tuple[str, ...]

    @property
    def natural_key(self) -> Tuple[str, datetime, str, int]:
        return (self.category, self.scraped_at, self.model_name, self.rank_position)

    def to_row(self) -> Dict[str, Any]:
        """Column mapping for the ``lm_arena_leaderboard_snapshots`` table."""
        record = LeaderboardRecord(
            rank_position=self.rank_position,
            model_name=self.model_name,
            organization=self.organization,
            overall_score=self.overall_score,
            votes=self.votes,
            license=self.license,
        ).model_dump()
        return {
            "arena": self.category,
            "scraped_at": self.scraped_at.isoformat(),
            **record,
            "source_url": self.source_url,
            "row_json": {"cells": list(self.row_raw), **record},
        }


class CategoryStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class CategoryOutcome(BaseModel):
    category: str
    status: CategoryStatus
    rows: int = 0
    error: Optional[str] = None


class RunReport(BaseModel):
    scraped_at: datetime
    outcomes: List[CategoryOutcome] = []

    def _with(self, status: CategoryStatus) -> List[str]:
        return [o.category for o in self.outcomes if o.status == status]

    @property
    def ok(self) -> List[str]:
        return self._with(CategoryStatus.OK)

    @property
    def empty(self) -> List[str]:
        return self._with(CategoryStatus.EMPTY)

    @property
    def failed(self) -> List[str]:
        return self._with(CategoryStatus.FAILED)

    @property
    def total_rows(self) -> int:
        return sum(o.rows for o in self.outcomes)
