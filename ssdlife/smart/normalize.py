"""Conversion of vendor life values into percent life used."""

import math
from decimal import Decimal


class NormalizationError(Exception):
    """Value and threshold cannot be turned into a percentage."""

    pass


def normalize(value: int | str | Decimal, threshold: int | str | Decimal) -> int:
    """
    Convert a descending life value into ascending percent used.

    ATA attributes count down from 100 (new) towards their threshold
    (worn out); NVMe "Percentage Used" counts up from 0. The value and
    threshold are both inverted and the result is the used share of the
    inverted range, rounded down:

        floor((100 - value) / (100 - threshold) * 100)

    Decimal division keeps the result exact for terminating fractions,
    so 71 against threshold 0 is 29, never 28.

    The result is not clamped. Callers decide what to do with values
    outside 0..100.

    Args:
        value: Current life value (normalized, worst or raw)
        threshold: Value at which the drive is considered worn out

    Returns:
        Percent of life used

    Raises:
        NormalizationError: If threshold is 100 or inputs are not numbers
    """
    try:
        inverted_value = 100 - Decimal(value)
        inverted_threshold = 100 - Decimal(threshold)
    except (ArithmeticError, TypeError, ValueError) as e:
        raise NormalizationError(f"Not a number: value={value!r} threshold={threshold!r}") from e

    if not (inverted_value.is_finite() and inverted_threshold.is_finite()):
        raise NormalizationError(f"Not a number: value={value!r} threshold={threshold!r}")

    if inverted_threshold == 0:
        raise NormalizationError(f"Threshold {threshold} leaves no range to wear through")

    return math.floor(inverted_value / inverted_threshold * 100)
