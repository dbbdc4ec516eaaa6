"""Numeric helpers shared by the aggregation components."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from fraud_analysis.errors import EmptyGroupError

WHOLE_FLOAT_LIMIT: float = 2.0 ** 53


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round like SQL ROUND on a numeric: halves go away from zero.

    Python's built-in round() uses banker's rounding, which would report
    e.g. 0.125 as 0.12 rather than 0.13.
    """
    # Non-finite values have nothing to round; doubles past 2**53 are already whole
    if not math.isfinite(value) or abs(value) >= WHOLE_FLOAT_LIMIT:
        return float(value)
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: float, whole: float, places: int = 2) -> float:
    """
    Express part as a percentage of whole, rounded to places.

    Raises:
        EmptyGroupError: If whole is zero.
    """
    if whole == 0:
        raise EmptyGroupError("percentage of an empty group")
    return round_half_up(part * 100.0 / whole, places)


def mean(values: Iterable[float]) -> float:
    """
    Arithmetic mean of values.

    Raises:
        EmptyGroupError: If values is empty.
    """
    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    if count == 0:
        raise EmptyGroupError("mean of an empty group")
    return total / count


def mean_or_none(values: Iterable[float], places: Optional[int] = None) -> Optional[float]:
    """Mean of values, or None when there are none."""
    try:
        result = mean(values)
    except EmptyGroupError:
        return None
    return result if places is None else round_half_up(result, places)


def percentage_or_zero(part: float, whole: float, places: int = 2) -> float:
    """Percentage of part in whole, or 0.0 for an empty group."""
    try:
        return percentage(part, whole, places)
    except EmptyGroupError:
        return 0.0
