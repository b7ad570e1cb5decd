from __future__ import annotations

import re
from typing import Optional

_INT_RE = re.compile(r"-?\d+")
_FLOAT_RE = re.compile(r"-?\d+(?:\.\d+)?")


def to_int(text: Optional[str]) -> Optional[int]:
    """Parse the first integer in ``text``.

    Dots and commas are treated as thousands separators, so ``"12.345"`` and
    ``"12,345 votes"`` both give 12345. Returns None when nothing matches.
    """
    if text is None:
        return None
    m = _INT_RE.search(str(text).replace(".", "").replace(",", ""))
    return int(m.group(0)) if m else None


def to_float(text: Optional[str]) -> Optional[float]:
    """Parse the first decimal number in ``text``, reading ``,`` as the decimal point."""
    if text is None:
        return None
    m = _FLOAT_RE.search(str(text).replace(",", ".", 1))
    return float(m.group(0)) if m else None
