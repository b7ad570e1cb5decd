from __future__ import annotations

import pathlib
from typing import List

from bs4 import BeautifulSoup

from ..core.models import RenderedRow
from ..errors import FetchError
from .sources import category_from_url
from .text_parsers import collapse_ws


def parse_html_rows(html: str) -> List[RenderedRow]:
    """Read leaderboard rows out of a rendered page.

    ``table tbody tr`` first, then bare ``table tr`` (saved pages need not
    carry a ``<tbody>``); pages without table markup expose ARIA rows
    (``role="row"``) instead. Cells follow the same fallback.
    """
    soup = BeautifulSoup(html, "html.parser")
    trs = soup.select("table tbody tr") or soup.select("table tr") or soup.select('[role="row"]')
    rows: List[RenderedRow] = []
    for tr in trs:
        cells = tr.select('[role="cell"]') or tr.select('td, div[role="cell"]')
        if not cells:
            continue
        link = tr.select_one("a[href]")
        link_text = collapse_ws(link.get_text(" ", strip=True)) if link is not None else ""
        rows.append(
            RenderedRow(
                cells=[collapse_ws(c.get_text(" ", strip=True)) for c in cells],
                link_text=link_text or None,
            )
        )
    return rows


class HtmlDirSource:
    """Replay saved pages from ``<dir>/<category>.html``."""

    def __init__(self, html_dir: pathlib.Path):
        self.html_dir = pathlib.Path(html_dir)

    async def start(self) -> None:
        if not self.html_dir.is_dir():
            raise FetchError(str(self.html_dir), "html directory not found")

    async def fetch_rows(self, url: str) -> List[RenderedRow]:
        path = self.html_dir / f"{category_from_url(url)}.html"
        try:
            html = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            raise FetchError(url, f"cannot read {path}: {exc}") from exc
        return parse_html_rows(html)

    async def close(self) -> None:
        return None
