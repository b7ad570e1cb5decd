"""Map a classified row's cells onto the six leaderboard fields.

Each field is resolved by an ordered fallback chain of candidates. A candidate
picks raw text out of the row (a fixed position, the link text, or the first
cell matching a pattern); the first candidate whose text parses wins. Layout
changes on the source pages should only need a new ``LayoutRules`` entry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from .models import LeaderboardRecord, RenderedRow
from .normalize import to_float, to_int
from .vendors import CellMatcher, LEADING_SCORE, LICENSE, ORGANIZATION, UNCERTAINTY, VOTES

logger = logging.getLogger(__name__)

Candidate = Callable[[RenderedRow], Optional[str]]


def cell_at(index: int) -> Candidate:
    def pick(row: RenderedRow) -> Optional[str]:
        n = len(row.cells)
        if -n <= index < n:
            return row.cells[index]
        return None

    pick.__name__ = f"cell_at({index})"
    return pick


def matching(matcher: CellMatcher) -> Candidate:
    def pick(row: RenderedRow) -> Optional[str]:
        return matcher.first(row.cells)

    pick.__name__ = f"matching({matcher.name})"
    return pick


def link_text(row: RenderedRow) -> Optional[str]:
    return row.link_text


def _text(raw: str) -> Optional[str]:
    return raw.strip() or None


@dataclass(frozen=True)
class FieldRule:
    candidates: Tuple[Candidate, ...]
    parse: Callable[[str], Any] = _text

    def resolve(self, row: RenderedRow) -> Any:
        for candidate in self.candidates:
            raw = candidate(row)
            if raw is None:
                continue
            value = self.parse(raw)
            if value is not None:
                return value
        return None


@dataclass(frozen=True)
class LayoutRules:
    version: str
    rank_position: FieldRule
    model_name: FieldRule
    overall_score: FieldRule
    votes: FieldRule
    organization: FieldRule
    license: FieldRule


# Rank(UB) | Model | Score | Votes | Organization | License, with columns that
# move or disappear between categories.
DEFAULT_LAYOUT = LayoutRules(
    version="2025.1",
    rank_position=FieldRule((cell_at(0),), to_int),
    model_name=FieldRule((link_text, cell_at(1))),
    overall_score=FieldRule((matching(UNCERTAINTY), matching(LEADING_SCORE)), to_float),
    # Tail order -3, -2, -1 is kept from the observed layouts; not derived.
    votes=FieldRule((matching(VOTES), cell_at(-3), cell_at(-2), cell_at(-1)), to_int),
    organization=FieldRule((matching(ORGANIZATION),)),
    license=FieldRule((matching(LICENSE),)),
)


def extract_record(row: RenderedRow, layout: LayoutRules = DEFAULT_LAYOUT) -> Optional[LeaderboardRecord]:
    """Return the record for an accepted row, or None if name or score is missing."""
    model_name = layout.model_name.resolve(row)
    score = layout.overall_score.resolve(row)
    if not model_name or score is None:
        logger.debug("dropping row without name or score: %s", row.cells)
        return None
    return LeaderboardRecord(
        rank_position=layout.rank_position.resolve(row),
        model_name=model_name,
        organization=layout.organization.resolve(row),
        overall_score=score,
        votes=layout.votes.resolve(row),
        license=layout.license.resolve(row),
    )
