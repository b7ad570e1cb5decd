from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from .core.extract import DEFAULT_LAYOUT, LayoutRules
from .core.models import CategoryOutcome, CategoryStatus, RunReport
from .fetch.arena import BASE_URL, CATEGORIES, scrape_category
from .fetch.sources import RowSource
from .store.snapshots import SnapshotPersister

logger = logging.getLogger(__name__)


async def _run_category(
    source: RowSource,
    persister: SnapshotPersister,
    category: str,
    scraped_at: datetime,
    base_url: str,
    layout: LayoutRules,
) -> CategoryOutcome:
    try:
        batch = await scrape_category(source, category, scraped_at, base_url, layout)
        if not batch:
            logger.warning("WARN %s: no rows", category)
            return CategoryOutcome(category=category, status=CategoryStatus.EMPTY)
        # supabase-py is synchronous; keep the event loop free while it writes
        written = await asyncio.to_thread(persister.persist, batch)
    except Exception as exc:
        logger.error("ERROR %s: %s", category, exc)
        logger.debug("%s failed", category, exc_info=True)
        return CategoryOutcome(category=category, status=CategoryStatus.FAILED, error=str(exc))
    logger.info("OK %s: %d rows", category, written)
    return CategoryOutcome(category=category, status=CategoryStatus.OK, rows=written)


async def run_snapshot_async(
    source: RowSource,
    persister: SnapshotPersister,
    categories: Iterable[str] = CATEGORIES,
    scraped_at: Optional[datetime] = None,
    base_url: str = BASE_URL,
    layout: LayoutRules = DEFAULT_LAYOUT,
) -> RunReport:
    """Scrape and persist every category in turn under one shared timestamp.

    A failing category is recorded in the report and the run moves on. Errors
    starting the source propagate; the source is closed on every exit path.
    """
    scraped_at = scraped_at or datetime.now(timezone.utc)
    report = RunReport(scraped_at=scraped_at)
    try:
        await source.start()
        for category in categories:
            outcome = await _run_category(source, persister, category, scraped_at, base_url, layout)
            report.outcomes.append(outcome)
    finally:
        await source.close()
    return report


def run_snapshot(source: RowSource, persister: SnapshotPersister, **kwargs) -> RunReport:
    return asyncio.run(run_snapshot_async(source, persister, **kwargs))
