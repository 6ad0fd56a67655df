"""Assorted utility helpers."""
import math
import re

from core.presets import CREDIT_TIERS, LOWEST_CREDIT_TIER

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _finite(f):
    return f if math.isfinite(f) else 0.0


def parse_money(value):
    """Parse ``"$1,234.50"``-style text into a float, ``0.0`` when unparsable.

    ``inf`` and ``nan`` count as unparsable.
    """
    if isinstance(value, (int, float)):
        return _finite(float(value))
    try:
        return _finite(float(str(value).replace("$", "").replace(",", "").strip()))
    except (TypeError, ValueError):
        return 0.0


def parse_percent(value):
    """Parse ``"6.5%"`` into ``6.5``, ``0.0`` when unparsable."""
    if isinstance(value, (int, float)):
        return _finite(float(value))
    try:
        return _finite(float(str(value).replace("%", "").strip()))
    except (TypeError, ValueError):
        return 0.0


def credit_score_to_tier(score):
    """Map a numeric credit score to its pricing tier."""
    m = _LEADING_INT.match(str(score))
    if not m:
        return CREDIT_TIERS[0][1]
    s = int(m.group(1))
    for floor, tier in CREDIT_TIERS:
        if s >= floor:
            return tier
    return LOWEST_CREDIT_TIER
