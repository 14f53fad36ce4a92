from __future__ import annotations

import math
from fractions import Fraction


# (exclusive lower bound on the original length, expansion factor); first match wins.
# Shorter UI strings grow proportionally more when translated.
EXPANSION_TIERS: tuple[tuple[int, Fraction], ...] = (
    (20, Fraction(13, 10)),
    (10, Fraction(14, 10)),
    (-1, Fraction(15, 10)),
)


def expansion_factor(length: int) -> Fraction:
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    for lower, factor in EXPANSION_TIERS:
        if length > lower:
            return factor
    raise AssertionError("unreachable: last tier covers every length")  # pragma: no cover


def target_length(length: int) -> int:
    """Minimum pseudo-localized length for a string of `length` characters."""
    return math.ceil(length * expansion_factor(length))


def filler_count(length: int) -> int:
    return max(0, target_length(length) - length)
