from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Tuple

from ..core.classify import is_data_row
from ..core.extract import DEFAULT_LAYOUT, LayoutRules, extract_record
from ..core.models import LeaderboardRecord, RenderedRow, SnapshotRecord
from .sources import RowSource

logger = logging.getLogger(__name__)

BASE_URL = "https://lmarena.ai/leaderboard"

CATEGORIES = (
    "text",
    "webdev",
    "vision",
    "text-to-image",
    "image-edit",
    "search",
    "text-to-video",
    "image-to-video",
    "copilot",
)


def category_url(category: str, base_url: str = BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{category}"


def extract_rows(rows: List[RenderedRow], layout: LayoutRules = DEFAULT_LAYOUT) -> List[Tuple[RenderedRow, LeaderboardRecord]]:
    """Classify rendered rows and extract a record from each data row."""
    out: List[Tuple[RenderedRow, LeaderboardRecord]] = []
    for row in rows:
        if not is_data_row(row.cells):
            continue
        record = extract_record(row, layout)
        if record is not None:
            out.append((row, record))
    return out


def build_snapshot(
    extracted: List[Tuple[RenderedRow, LeaderboardRecord]],
    category: str,
    scraped_at: datetime,
    source_url: str,
) -> List[SnapshotRecord]:
    """Attach provenance and final ranks.

    Rows without a parsed rank take their 1-based position among surviving
    rows. Rows repeating a natural key collapse onto the last one.
    """
    by_key: Dict[tuple, SnapshotRecord] = {}
    for i, (row, record) in enumerate(extracted):
        snap = SnapshotRecord(
            **record.model_dump(exclude={"rank_position"}),
            rank_position=record.rank_position if record.rank_position is not None else i + 1,
            category=category,
            scraped_at=scraped_at,
            source_url=source_url,
            row_raw=tuple(row.cells),
        )
        if snap.natural_key in by_key:
            logger.debug("%s: duplicate key %s", category, snap.natural_key)
            del by_key[snap.natural_key]
        by_key[snap.natural_key] = snap
    return list(by_key.values())


async def scrape_category(
    source: RowSource,
    category: str,
    scraped_at: datetime,
    base_url: str = BASE_URL,
    layout: LayoutRules = DEFAULT_LAYOUT,
) -> List[SnapshotRecord]:
    """Fetch one category page and return its snapshot records (possibly empty)."""
    url = category_url(category, base_url)
    rows = await source.fetch_rows(url)
    extracted = extract_rows(rows, layout)
    logger.debug("%s: %d rendered rows, %d records", category, len(rows), len(extracted))
    return build_snapshot(extracted, category, scraped_at, url)
