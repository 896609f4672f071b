"""
Backdrop — static star shells around the whole scene.

Each shell scatters stars uniformly in direction at a distance between
``radius`` and ``radius + depth`` from the origin. Hue walks around the
colour wheel with the star index; saturation 0 gives plain white dust.
"""
from __future__ import annotations
import colorsys
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from utils.constants import BACKDROP_LAYERS, BACKDROP_LIGHTNESS


@dataclass(frozen=True)
class StarShell:
    positions: np.ndarray   # (N, 3) world space
    sizes: np.ndarray       # (N,)
    colors: np.ndarray      # (N, 3) uint8

    def __post_init__(self) -> None:
        for arr in (self.positions, self.sizes, self.colors):
            arr.setflags(write=False)

    def __len__(self) -> int:
        return len(self.positions)


def star_shell(
    rng: np.random.Generator,
    radius: float,
    depth: float,
    count: int,
    factor: float,
    saturation: float,
) -> StarShell:
    directions = rng.standard_normal((count, 3))
    directions /= np.linalg.norm(directions, axis=1, keepdims=True)
    distance = radius + depth - depth * rng.random(count)

    colors = np.empty((count, 3), dtype=np.uint8)
    for i in range(count):
        r, g, b = colorsys.hls_to_rgb(i / count, BACKDROP_LIGHTNESS, saturation)
        colors[i] = (round(r * 255), round(g * 255), round(b * 255))

    return StarShell(
        positions=directions * distance[:, None],
        sizes=(0.5 + 0.5 * rng.random(count)) * factor,
        colors=colors,
    )


def build_backdrop(
    rng: Optional[np.random.Generator] = None,
    layers: Sequence[Tuple[float, float, int, float, float]] = BACKDROP_LAYERS,
) -> List[StarShell]:
    rng = rng if rng is not None else np.random.default_rng()
    return [star_shell(rng, *layer) for layer in layers]
