"""
Snowfall — background flakes drifting down through the scene.

Positions are a pure function of elapsed time and each flake's random
seed values, so nothing accumulates between ticks.
"""
from __future__ import annotations
from typing import Optional

import numpy as np

from domain.models import SnowFrame
from utils.constants import (
    SNOW_COUNT,
    SNOW_DEPTH_OFFSET,
    SNOW_FADE_START,
    SNOW_SPREAD,
    SNOW_SWAY,
    SNOW_WRAP,
)


class Snowfall:
    """
    Parameters
    ----------
    rng : numpy.random.Generator
    count : int
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, count: int = SNOW_COUNT) -> None:
        rng = rng if rng is not None else np.random.default_rng()
        spread = np.asarray(SNOW_SPREAD)

        self._base = (rng.random((count, 3)) - 0.5) * spread
        self._base[:, 2] += SNOW_DEPTH_OFFSET
        self._seed = rng.random((count, 3))
        self._speed = 1.0 + self._seed[:, 1] * 2.0
        self._scratch = np.empty(count, dtype=np.float64)

        self._frame = SnowFrame(
            positions=np.empty((count, 3), dtype=np.float64),
            alphas=np.empty(count, dtype=np.float64),
            sizes=150.0 * self._seed[:, 0] + 50.0,
        )

    def update(self, elapsed: float) -> SnowFrame:
        pos = self._frame.positions
        s = self._scratch
        wrap = SNOW_WRAP

        # falling, wrapped into [-wrap, wrap)
        np.multiply(self._speed, -elapsed, out=s)
        np.add(s, self._base[:, 1] + wrap, out=s)
        np.mod(s, 2.0 * wrap, out=s)
        np.subtract(s, wrap, out=pos[:, 1])

        # swaying
        np.add(self._seed[:, 2] * 10.0, elapsed * 0.5, out=s)
        np.sin(s, out=s)
        np.add(self._base[:, 0], s * SNOW_SWAY, out=pos[:, 0])
        np.add(self._seed[:, 0] * 10.0, elapsed * 0.3, out=s)
        np.cos(s, out=s)
        np.add(self._base[:, 2], s * SNOW_SWAY, out=pos[:, 2])

        # fade out near the top and bottom
        np.abs(pos[:, 1], out=s)
        np.subtract(s, SNOW_FADE_START, out=s)
        np.divide(s, wrap - SNOW_FADE_START, out=s)
        np.clip(s, 0.0, 1.0, out=s)
        np.multiply(s, s * (3.0 - 2.0 * s), out=s)
        np.subtract(1.0, s, out=self._frame.alphas)

        return self._frame
