"""Currency rounding helpers"""

import math

# Smallest meaningful difference between two currency amounts
EPSILON = 0.01


def round2(value: float) -> float:
    """Round to 2 decimals: multiply by 100, round to nearest integer (halves up), divide by 100"""
    return math.floor(value * 100 + 0.5) / 100


def to_cents(value: float) -> int:
    """Convert a currency amount to integer cents using the same rounding as round2"""
    return int(math.floor(value * 100 + 0.5))


def from_cents(cents: int) -> float:
    return cents / 100
