from __future__ import annotations
from typing import List, Optional, Tuple

import numpy as np

from domain.enums import Gesture
from domain.models import GestureSample

Point = Tuple[float, float, float]


def make_landmarks(
    thumb: Point = (0.5, 0.5, 0.0),
    index: Point = (0.7, 0.5, 0.0),
    mcp: Point = (0.5, 0.5, 0.0),
    rng: Optional[np.random.Generator] = None,
) -> List[Point]:
    """A synthetic 21-point hand; only landmarks 4, 8 and 9 are controlled."""
    if rng is None:
        points = [(0.3, 0.3, 0.0)] * 21
    else:
        points = [tuple(float(v) for v in rng.random(3)) for _ in range(21)]
    points = list(points)
    points[4] = thumb
    points[8] = index
    points[9] = mcp
    return points


def open_hand(x: float = 0.5, y: float = 0.5) -> GestureSample:
    return GestureSample(hand_detected=True, gesture=Gesture.OPEN, pointer=(x, y))


def pinch(x: float = 0.5, y: float = 0.5) -> GestureSample:
    return GestureSample(hand_detected=True, gesture=Gesture.PINCH, pointer=(x, y))
