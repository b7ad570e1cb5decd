from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class CellMatcher:
    """A compiled pattern that picks the first matching cell of a row."""

    name: str
    pattern: re.Pattern

    def matches(self, text: str) -> bool:
        return self.pattern.search(text or "") is not None

    def first(self, cells: Sequence[str]) -> Optional[str]:
        for cell in cells:
            if self.matches(cell):
                return cell
        return None


def _matcher(name: str, regex: str, flags: int = 0) -> CellMatcher:
    return CellMatcher(name=name, pattern=re.compile(regex, flags))


# Vendor names, model families that imply a vendor, and domain-like suffixes.
ORGANIZATION_TOKENS = (
    "openai", "anthropic", "google", "meta", "alibaba", "minimax", "mistral",
    r"z\.ai", "microsoft", "tencent", "bytedance", "cohere", "stepfun",
    "perplexity", "nvidia", "qwen", "moonshot", "deepseek", "gemma", "gemini",
    "llama", "api", "ai", r"\.com", r"\.cn", r"\.co",
)

LICENSE_TOKENS = ("MIT", "Apache", "Proprietary", "Llama", "Open Model", "CC-", "Gemma")

ORGANIZATION = _matcher("organization", "(" + "|".join(ORGANIZATION_TOKENS) + ")", re.IGNORECASE)
LICENSE = _matcher("license", "(" + "|".join(re.escape(t) for t in LICENSE_TOKENS) + ")", re.IGNORECASE)
UNCERTAINTY = _matcher("uncertainty", r"(±|\+/-)")
VOTES = _matcher("votes", r"vote", re.IGNORECASE)
LEADING_SCORE = _matcher("leading_score", r"^\d{3,4}")
SCORE_PRESENCE = _matcher("score_presence", r"\d{3,4}(\.\d+)?")

