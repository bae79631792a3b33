# foia_intel/logic/scoring.py

"""Rounding and clamping helpers shared by the scoring components."""

import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Rounds to ``ndigits`` with halves going up (built-in ``round`` rounds half to even)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(value, upper))
