import asyncio

import pytest

from arena_snapshot.core.classify import is_data_row
from arena_snapshot.errors import FetchError
from arena_snapshot.fetch.html import HtmlDirSource, parse_html_rows
from arena_snapshot.fetch.sources import MarkdownCacheSource, category_from_url
from arena_snapshot.fetch.text_parsers import markdown_row, parse_markdown_tables

TABLE_HTML = """
<html><body>
<h2>Text Arena</h2>
<table>
  <thead><tr><th>Rank (UB)</th><th>Model</th><th>Score</th><th>Votes</th></tr></thead>
  <tbody>
    <tr><td>1</td><td><a href="/m/gpt-5">GPT-5</a>
        <span>new</span></td><td>1460 ± 5</td><td>12,345</td></tr>
    <tr><td>2</td><td>claude-opus-4</td><td>1441   ± 6</td><td>9,876</td></tr>
  </tbody>
</table>
</body></html>
"""

ARIA_HTML = """
<div role="table">
  <div role="row"><div role="columnheader">Rank</div><div role="columnheader">Model</div></div>
  <div role="row"><div role="cell">1</div><div role="cell">veo-3</div><div role="cell">1250</div></div>
</div>
"""

MARKDOWN = """
# Text-to-Image

| Rank (UB) | Model | Score | Votes |
| --- | --- | :---: | --- |
| 1 | [gpt-image-1](https://lmarena.ai/m/1) | 1170 ± 4 | 20,000 |
| 2 | imagen-4 | 1160 ± 5 | 18,500 |
"""


def test_parse_html_rows_reads_table_body():
    rows = parse_html_rows(TABLE_HTML)
    assert len(rows) == 2
    assert rows[0].cells == ["1", "GPT-5 new", "1460 ± 5", "12,345"]
    assert rows[0].link_text == "GPT-5"
    assert rows[1].cells[2] == "1441 ± 6"
    assert rows[1].link_text is None


def test_parse_html_rows_falls_back_to_aria_rows():
    rows = parse_html_rows(ARIA_HTML)
    assert [r.cells for r in rows] == [["1", "veo-3", "1250"]]


def test_html_dir_source(tmp_path):
    (tmp_path / "text.html").write_text(TABLE_HTML, encoding="utf-8")
    source = HtmlDirSource(tmp_path)

    async def go():
        await source.start()
        rows = await source.fetch_rows("https://lmarena.ai/leaderboard/text")
        with pytest.raises(FetchError):
            await source.fetch_rows("https://lmarena.ai/leaderboard/vision")
        await source.close()
        return rows

    assert len(asyncio.run(go())) == 2


def test_html_dir_source_requires_directory(tmp_path):
    with pytest.raises(FetchError):
        asyncio.run(HtmlDirSource(tmp_path / "missing").start())


def test_category_from_url():
    assert category_from_url("https://lmarena.ai/leaderboard/image-edit/") == "image-edit"


def test_parse_markdown_tables_keeps_section():
    tables = parse_markdown_tables(MARKDOWN)
    assert len(tables) == 1
    assert tables[0].section == "Text-to-Image"
    assert tables[0].headers[0] == "Rank (UB)"
    assert len(tables[0].rows) == 2


def test_markdown_row_extracts_link_text():
    r = markdown_row(["1", "[gpt-image-1](https://x/1)", " 1170  ± 4 "])
    assert r.cells == ["1", "gpt-image-1", "1170 ± 4"]
    assert r.link_text == "gpt-image-1"


def test_markdown_cache_source_replays_latest_snapshot(tmp_path):
    (tmp_path / "text-to-image-20250101.md").write_text("# Old\n\n| a | b |\n| - | - |\n| 1 | 2 |\n", encoding="utf-8")
    (tmp_path / "text-to-image-20250820.md").write_text(MARKDOWN, encoding="utf-8")
    source = MarkdownCacheSource(tmp_path)
    rows = asyncio.run(source.fetch_rows("https://lmarena.ai/leaderboard/text-to-image"))

    assert len(rows) == 3
    assert not is_data_row(rows[0].cells)
    assert rows[1].link_text == "gpt-image-1"
    assert rows[2].cells == ["2", "imagen-4", "1160 ± 5", "18,500"]


def test_markdown_cache_source_without_snapshot(tmp_path):
    with pytest.raises(FetchError):
        asyncio.run(MarkdownCacheSource(tmp_path).fetch_rows("https://lmarena.ai/leaderboard/text"))


def test_markdown_cache_source_ignores_longer_category_prefixes(tmp_path):
    (tmp_path / "text-20250820.md").write_text(
        "# Text\n\n| Rank | Model | Score |\n| - | - | - |\n| 1 | gpt-5 | 1460 |\n", encoding="utf-8"
    )
    (tmp_path / "text-to-video-20250821.md").write_text(MARKDOWN, encoding="utf-8")
    rows = asyncio.run(MarkdownCacheSource(tmp_path).fetch_rows("https://lmarena.ai/leaderboard/text"))
    assert rows[1].cells == ["1", "gpt-5", "1460"]


def test_parse_html_rows_without_tbody():
    html = "<table><tr><th>Rank</th><th>Model</th><th>Score</th></tr><tr><td>1</td><td>gpt-5</td><td>1460 ± 5</td></tr></table>"
    rows = parse_html_rows(html)
    assert [r.cells for r in rows] == [["1", "gpt-5", "1460 ± 5"]]
