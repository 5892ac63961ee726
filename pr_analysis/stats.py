"""Mean and outlier-adjusted mean over numeric samples."""

from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Sequence

TWO_PLACES = Decimal('0.01')

# Samples further than this many IQRs outside the quartiles are outliers
IQR_FACTOR = 1.5


class SampleStats(NamedTuple):
    mean: Decimal
    mean_without_outliers: Decimal


def _round(value: float) -> Decimal:
    # Decimal(float) is exact, so half-up rounding matches fixed-point formatting of the float
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def mean(values: Sequence[float]) -> Decimal:
    """Arithmetic mean rounded to two decimals, or 0 for an empty sample."""
    if not values:
        return Decimal(0)
    return _round(sum(values) / len(values))


def calculate_stats(values: Sequence[float]) -> SampleStats:
    """Calculate the mean and the mean without outliers.

    Quartiles are taken positionally from the sorted sample: q1 is the element
    at index n // 4 and q3 the element at index 3n // 4. Values outside
    [q1 - 1.5 * IQR, q3 + 1.5 * IQR] are dropped before averaging.

    Args:
        values: Numeric samples, in any order

    Returns:
        SampleStats with both means rounded to two decimals, (0, 0) when empty
    """
    if not values:
        return SampleStats(Decimal(0), Decimal(0))

    ordered = sorted(values)
    n = len(ordered)
    q1 = ordered[n // 4]
    q3 = ordered[(n * 3) // 4]
    iqr = q3 - q1
    lower = q1 - IQR_FACTOR * iqr
    upper = q3 + IQR_FACTOR * iqr
    kept = [x for x in ordered if lower <= x <= upper]

    # The kept set always contains q1 and q3, so it is never empty
    return SampleStats(mean(ordered), mean(kept))
