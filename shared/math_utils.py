"""
Passguard Numeric Utilities
============================

Small numeric helpers shared by the analyzers and the output layer.

Python's built-in :func:`round` uses banker's rounding (``round(2.5) == 2``);
score arithmetic and human-readable durations here round half away from
zero so that the same input always lands on the same displayed value.

References:
    - IEEE 754-2008, Section 4.3: Rounding-direction attributes.
"""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round *value* to *ndigits* decimals, halves away from zero.

    Args:
        value: Number to round.
        ndigits: Decimal places to keep.

    Returns:
        The rounded value. Non-finite input is returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** ndigits
    return math.copysign(math.floor(abs(value) * factor + 0.5) / factor, value)


def round_int(value: float) -> int:
    """Half-up rounding to the nearest integer."""
    return int(round_half_up(value))


def clamp(value: float, lower: float, upper: float) -> float:
    """Constrain *value* to the closed interval ``[lower, upper]``."""
    return max(lower, min(upper, value))
