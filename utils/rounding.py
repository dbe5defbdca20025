"""
Fixed-precision rounding shared by scoring, aggregation and network output.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP


def round_fixed(value: float, digits: int) -> float:
    """Round half away from zero on the exact binary value of ``value``."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
    # normalise -0.0
    return rounded + 0.0
