"""Coercion helpers for feed values."""

from __future__ import annotations

import math
from typing import Any


def to_non_negative_float(value: Any) -> float:
    """Return value as a finite float >= 0, or 0.0 when missing or not numeric.

    Accepts numbers and numeric strings (the feed sends both). Booleans,
    NaN, infinities and negative values map to 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        f = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(f) or f < 0:
        return 0.0
    return f


def clean_str(value: Any) -> str | None:
    """Return a stripped non-empty string, or None."""
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None
