from datetime import datetime, timezone

import pytest

from arena_snapshot.core.models import RenderedRow
from arena_snapshot.errors import FetchError
from arena_snapshot.fetch.sources import category_from_url


def row(*cells, link=None):
    return RenderedRow(cells=list(cells), link_text=link)


class FakeSource:
    """Row source serving canned rows per category."""

    def __init__(self, pages=None, fail=(), fail_start=False):
        self.pages = pages or {}
        self.fail = set(fail)
        self.fail_start = fail_start
        self.started = False
        self.closed = False
        self.visited = []

    async def start(self):
        if self.fail_start:
            raise FetchError("chromium", "executable doesn't exist")
        self.started = True

    async def fetch_rows(self, url):
        category = category_from_url(url)
        self.visited.append(category)
        if category in self.fail:
            raise FetchError(url, "Timeout 60000ms exceeded")
        return list(self.pages.get(category, []))

    async def close(self):
        self.closed = True


@pytest.fixture
def scraped_at():
    return datetime(2025, 8, 20, 6, 0, tzinfo=timezone.utc)


@pytest.fixture
def leaderboard_rows():
    return [
        row("Rank (UB)", "Model", "Score", "Votes", "Organization", "License"),
        row("1", "gpt-5-high", "1460 ± 5", "12,345 votes", "OpenAI", "Proprietary", link="GPT-5 (high)"),
        row("2", "claude-opus-4", "1441 ± 6", "9.876 votes", "Anthropic", "Proprietary"),
        row("Load more"),
        row("", "kimi-k2", "1420 ± 7", "4,321 votes", "Moonshot", "Modified MIT"),
    ]


@pytest.fixture
def fake_source():
    return FakeSource
