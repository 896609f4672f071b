"""
Pure geometric and interpolation helpers.
No imports from the rest of the project — safe to use anywhere.
"""
from __future__ import annotations
import math
from typing import Sequence


def dist3(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two 3D points."""
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def approach_factor(rate: float, dt: float) -> float:
    """
    Fraction of the remaining distance covered in dt seconds when
    approaching a target exponentially at `rate` per second.

    Always within [0, 1); negative dt counts as no time passing.
    """
    if dt <= 0.0 or rate <= 0.0:
        return 0.0
    return 1.0 - math.exp(-rate * dt)


def damp(current: float, target: float, rate: float, dt: float) -> float:
    """Frame-rate independent exponential approach of current → target."""
    return lerp(current, target, approach_factor(rate, dt))


