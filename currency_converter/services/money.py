"""Money parsing / rounding / formatting helpers.

Centralized so the view, the JSON API and the template render numbers the
same way. Plain float arithmetic: amounts are display values, never ledger
entries.
"""

from __future__ import annotations

import math
import re
from typing import Optional

# Plain ASCII decimal, optional sign and exponent; no "1_000", no non-ASCII digits
_AMOUNT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def round2(value: float) -> float:
    return round(value, 2)


def format_amount(value: float) -> str:
    """Two decimals, trailing zeros kept (91.2 -> '91.20')."""
    return f"{value:.2f}"


def format_rate(value: Optional[float]) -> str:
    if value is None:
        return "0"
    return f"{value:.4f}"


def parse_amount(text: Optional[str]) -> Optional[float]:
    """Return the finite number in `text`, or None when there is none.

    Blank input, garbage, digit separators, non-ASCII digits, 'nan' and 'inf'
    all yield None.
    """
    if text is None:
        return None
    text = text.strip()
    if not _AMOUNT_RE.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value
