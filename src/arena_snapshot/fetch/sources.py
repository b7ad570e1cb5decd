"""Row sources: anything that turns a category URL into rendered table rows."""
from __future__ import annotations

import logging
import pathlib
import re
from typing import List, Protocol

from ..core.models import RenderedRow
from ..errors import FetchError
from .text_parsers import first_table_by_section, parse_markdown_tables, table_rows

logger = logging.getLogger(__name__)


class RowSource(Protocol):
    async def start(self) -> None: ...

    async def fetch_rows(self, url: str) -> List[RenderedRow]: ...

    async def close(self) -> None: ...


def category_from_url(url: str) -> str:
    return url.rstrip("/").rsplit("/", 1)[-1]


class MarkdownCacheSource:
    """Replay Markdown snapshots saved as ``<dir>/<category>-<stamp>.md``.

    The newest file per category wins. The table under a heading naming the
    category is preferred, else the first table in the file.
    """

    def __init__(self, cache_dir: pathlib.Path):
        self.cache_dir = pathlib.Path(cache_dir)

    async def start(self) -> None:
        if not self.cache_dir.is_dir():
            raise FetchError(str(self.cache_dir), "snapshot directory not found")

    def _load_latest_snapshot(self, prefix: str) -> str:
        # "text-*.md" also globs "text-to-image-*.md"; stamps carry no letters
        stamp = re.compile(rf"^{re.escape(prefix)}-[\d_T:.\-]+\.md$")
        files = sorted((f for f in self.cache_dir.glob(f"{prefix}-*.md") if stamp.match(f.name)), reverse=True)
        if not files:
            raise FetchError(prefix, f"no snapshot in {self.cache_dir}")
        logger.debug("replaying %s", files[0])
        return files[0].read_text(encoding="utf-8", errors="ignore")

    async def fetch_rows(self, url: str) -> List[RenderedRow]:
        category = category_from_url(url)
        md = self._load_latest_snapshot(category)
        table = first_table_by_section(md, category)
        if table is None:
            tables = parse_markdown_tables(md)
            if not tables:
                return []
            table = tables[0]
        return table_rows(table)

    async def close(self) -> None:
        return None
