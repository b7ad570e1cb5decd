"""Playwright row source for the live leaderboard pages.

One Chromium page is opened at start-up and reused for every category; the
orchestrator visits categories one at a time so the page is never shared
concurrently.
"""

from __future__ import annotations

import logging
from time import monotonic
from typing import List, Optional

from ..core.models import RenderedRow
from ..errors import FetchError
from .text_parsers import collapse_ws

logger = logging.getLogger(__name__)

# JS: table rows first, ARIA rows when the page has no <table>
EXTRACT_ROWS_JS = """
() => {
    let rows = Array.from(document.querySelectorAll('table tbody tr'));
    if (!rows.length) rows = Array.from(document.querySelectorAll('[role="row"]'));

    const out = [];
    for (const row of rows) {
        let cells = Array.from(row.querySelectorAll('[role="cell"]'));
        if (!cells.length) cells = Array.from(row.querySelectorAll('td, div[role="cell"]'));
        if (!cells.length) continue;
        const a = row.querySelector('a[href]');
        out.push({
            cells: cells.map(c => c.innerText || ''),
            link: a ? (a.innerText || '') : null,
        });
    }
    return out;
}
"""

ROW_SELECTOR = 'table tbody tr, [role="row"]'


class BrowserRowSource:
    def __init__(self, headless: bool = True, timeout_ms: int = 60_000, settle_ms: int = 1_000):
        self.headless = headless
        self.timeout_ms = timeout_ms
        self.settle_ms = settle_ms
        self._playwright = None
        self._browser = None
        self._page = None

    async def start(self) -> None:
        from playwright.async_api import Error as PlaywrightError, async_playwright

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            self._page = await self._browser.new_page()
        except PlaywrightError as exc:
            raise FetchError("chromium", (str(exc).splitlines() or ["launch failed"])[0]) from exc

    async def fetch_rows(self, url: str) -> List[RenderedRow]:
        from playwright.async_api import Error as PlaywrightError

        if self._page is None:
            raise FetchError(url, "browser not started")
        page = self._page
        # goto and the row wait share one timeout_ms deadline; settle_ms comes on top
        deadline = monotonic() + self.timeout_ms / 1000
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
            remaining_ms = int((deadline - monotonic()) * 1000)
            if remaining_ms > 0:
                try:
                    await page.wait_for_selector(ROW_SELECTOR, timeout=remaining_ms)
                except PlaywrightError:
                    logger.debug("no rows rendered on %s before timeout", url)
            await page.wait_for_timeout(self.settle_ms)
            raw = await page.evaluate(EXTRACT_ROWS_JS) or []
        except PlaywrightError as exc:
            raise FetchError(url, (str(exc).splitlines() or [type(exc).__name__])[0]) from exc
        logger.debug("%s: %d rendered rows", url, len(raw))
        return [_to_row(item) for item in raw]

    async def close(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = self._page = self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()


def _to_row(item: dict) -> RenderedRow:
    link: Optional[str] = item.get("link")
    return RenderedRow(
        cells=[collapse_ws(c) for c in item.get("cells", [])],
        link_text=collapse_ws(link or "") or None,
    )
