from __future__ import annotations

import math


def check_non_negative(value: float, name: str) -> float:
    """Return ``value`` as float; raise ValueError if it is negative or not finite."""
    v = float(value)
    if not math.isfinite(v) or v < 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}")
    return v


def check_fraction(value: float, name: str) -> float:
    """Return ``value`` as float; raise ValueError unless it lies in [0, 1]."""
    v = float(value)
    if not (0.0 <= v <= 1.0):
        raise ValueError(f"{name} must be in [0, 1], got {value!r}")
    return v
