"""
Decimal Utilities - Ranking Electoral
electoral_scoring/scoring/utils.py

Provides precision-safe decimal math for scoring calculations.
Every calculator funnels raw inputs through these helpers, so NaN,
infinities and negative counts never reach a score.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional, Sequence, Tuple, Union

Number = Union[int, float, Decimal]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def to_decimal(value: Optional[Number], places: int = 4) -> Decimal:
    """
    Convert a number to Decimal with explicit precision. None and non-finite values become 0.

    Quantizing runs with enough precision for the whole integer part, so
    huge finite inputs (1e30, 1e300) convert instead of raising; callers
    clamp the result.
    """
    if value is None:
        return ZERO
    if isinstance(value, float) and not math.isfinite(value):
        return ZERO
    dec = value if isinstance(value, Decimal) else Decimal(str(value))
    if not dec.is_finite():
        return ZERO
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, dec.adjusted() + places + 2)
        return dec.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)


def to_count(value: Optional[Number]) -> int:
    """Coerce a count-like input to a non-negative int."""
    if value is None:
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(int(value), 0)


def clamp(
    value: Decimal,
    min_val: Decimal = ZERO,
    max_val: Decimal = HUNDRED,
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def percent(value: Optional[Number]) -> Decimal:
    """A percentage input clamped to [0, 100]."""
    return clamp(to_decimal(value))


def round_half_up(value: Decimal) -> Decimal:
    """Round to an integral Decimal, halves away from zero."""
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def scale_percent(pct: Decimal, max_points: int) -> Decimal:
    """
    Map a 0-100 percentage onto a ``max_points`` scale.

    Formula: round(pct / 100 × max_points)
    """
    return round_half_up(pct / HUNDRED * Decimal(max_points))


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def tier_points(value: Number, tiers: Sequence[Tuple[Number, int]]) -> int:
    """
    Tiered lookup. ``tiers`` is ordered by descending threshold; the first
    threshold that ``value`` reaches wins. Below every threshold scores 0.
    """
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0
