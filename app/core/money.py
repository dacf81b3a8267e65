"""
Monetary rounding helpers
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

TWO_PLACES = Decimal("0.01")

Number = Union[Decimal, float, int]


def to_decimal(value: Optional[Number]) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging binary noise along
    return Decimal(str(value))


def round_money(value: Optional[Number]) -> float:
    """Round half-up to 2 decimal places for a response payload"""
    return float(to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def percent_change(current: Number, previous: Number) -> Optional[float]:
    """
    Period-over-period change in percent, rounded to 2 places.

    With no previous spending the change is 100 when there is current
    spending and undefined (None) otherwise.
    """
    current = to_decimal(current)
    previous = to_decimal(previous)
    if previous == 0:
        return 100.0 if current > 0 else None
    return round_money((current - previous) / previous * 100)
