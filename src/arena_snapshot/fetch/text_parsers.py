from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from ..core.models import RenderedRow


_MD_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_WS_RE = re.compile(r"\s+")


@dataclass
class MarkdownTable:
    section: str
    headers: List[str]
    rows: List[List[str]]


def collapse_ws(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def _is_md_heading(line: str) -> Optional[str]:
    s = line.strip()
    # Hash heading: # Title
    if s.startswith("#"):
        title = s.lstrip("#").strip()
        return title if title else None
    # Bold-only section: **Text**
    if s.startswith("**") and s.endswith("**") and len(s) >= 4:
        title = s.strip("*").strip()
        return title if title else None
    return None


def _is_separator(line: str) -> bool:
    # typical: | --- | :---: |
    s = line.strip()
    if '|' not in s:
        return False
    return any(ch in s for ch in ('-', ':')) and set(s.replace('|', '').strip()) <= set('-: ')


def _split_row(line: str) -> List[str]:
    s = line.strip()
    if s.startswith('|'):
        s = s[1:]
    if s.endswith('|'):
        s = s[:-1]
    return [c.strip() for c in s.split('|')]


def parse_markdown_tables(md: str) -> List[MarkdownTable]:
    """Parse all Markdown tables with their nearest preceding section title.

    Section title is taken from the nearest prior heading line ("# ...") or bold line ("**Text**").
    """
    lines = md.splitlines()
    out: List[MarkdownTable] = []
    current_section = ""
    i = 0
    n = len(lines)
    while i < n:
        line = lines[i]
        title = _is_md_heading(line)
        if title is not None:
            current_section = title
            i += 1
            continue
        if '|' in line and i + 1 < n and _is_separator(lines[i + 1]):
            header_cells = _split_row(line)
            j = i + 2
            body: List[List[str]] = []
            while j < n and '|' in lines[j].strip() and not _is_md_heading(lines[j]):
                row = _split_row(lines[j])
                if any(cell for cell in row):
                    body.append(row)
                j += 1
            if header_cells and body:
                out.append(MarkdownTable(section=current_section, headers=header_cells, rows=body))
                i = j
                continue
        i += 1
    return out


def first_table_by_section(md: str, section_match: str) -> Optional[MarkdownTable]:
    """Return the first table whose section title contains the given text (case-insensitive)."""
    section_match = (section_match or "").lower()
    for t in parse_markdown_tables(md):
        if section_match in (t.section or "").lower():
            return t
    return None


def markdown_row(cells: List[str]) -> RenderedRow:
    """Turn Markdown cells into a rendered row; ``[text](href)`` counts as a link."""
    link = None
    texts: List[str] = []
    for cell in cells:
        m = _MD_LINK_RE.search(cell)
        if m and link is None:
            link = collapse_ws(m.group(1)) or None
        texts.append(collapse_ws(_MD_LINK_RE.sub(r"\1", cell)))
    return RenderedRow(cells=texts, link_text=link)


def table_rows(table: MarkdownTable) -> List[RenderedRow]:
    """Header first, then body rows, the way the page renders them."""
    return [markdown_row(table.headers)] + [markdown_row(r) for r in table.rows]
