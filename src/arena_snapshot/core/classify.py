from __future__ import annotations

import logging
from typing import Sequence

from .models import RowClass
from .vendors import SCORE_PRESENCE

logger = logging.getLogger(__name__)

HEADER_RANK_TOKEN = "rank"
HEADER_NAME_TOKEN = "model"


def classify_row(cells: Sequence[str]) -> RowClass:
    """Tag a rendered row as data or rejected (header or noise).

    Header rows and data rows share the same markup, so the row is accepted
    only when it carries a 3-4 digit score and does not name both the rank
    and model columns.
    """
    if not cells:
        return RowClass.REJECTED
    joined = " | ".join(cells).lower()
    if HEADER_RANK_TOKEN in joined and HEADER_NAME_TOKEN in joined:
        logger.debug("header row: %s", joined)
        return RowClass.REJECTED
    if not SCORE_PRESENCE.matches(joined):
        return RowClass.REJECTED
    return RowClass.DATA


def is_data_row(cells: Sequence[str]) -> bool:
    return classify_row(cells) is RowClass.DATA
