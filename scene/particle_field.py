"""
ParticleFieldGenerator — builds the static per-particle dataset once.

Every population gets two anchors (assembled tree / exploded cloud), a base
scale, a colour and a rotation phase. The arrays are marked read-only once
built; the animator only ever reads them.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Sequence, Tuple

import numpy as np

from domain.enums import ParticleCategory
from domain.models import ParticleRecord, RGB
from utils.constants import (
    HOT_PINK,
    LAVENDER,
    LEAF_COUNT,
    LEAF_SCALE,
    LEAF_SPHERE_RADIUS,
    LIGHT_PINK,
    ORNAMENT_COUNT,
    ORNAMENT_RADIUS_FACTOR,
    ORNAMENT_SCALE,
    ORNAMENT_SPHERE_RADIUS,
    RIBBON_COUNT,
    RIBBON_JITTER,
    RIBBON_OFFSET,
    RIBBON_SCALE,
    RIBBON_SPHERE_RADIUS,
    RIBBON_TURNS,
    TREE_HEIGHT,
    TREE_RADIUS,
    WHITE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticleSet:
    """
    Column-oriented storage for one category.

    assembled, exploded, phases : (N, 3) float64
    scales                      : (N,)   float64
    colors                      : (N, 3) uint8
    """
    category: ParticleCategory
    assembled: np.ndarray
    exploded: np.ndarray
    scales: np.ndarray
    colors: np.ndarray
    phases: np.ndarray

    def __post_init__(self) -> None:
        for arr in (self.assembled, self.exploded, self.scales, self.colors, self.phases):
            arr.setflags(write=False)

    def __len__(self) -> int:
        return len(self.scales)

    def record(self, index: int) -> ParticleRecord:
        return ParticleRecord(
            anchor_assembled=tuple(float(v) for v in self.assembled[index]),
            anchor_exploded=tuple(float(v) for v in self.exploded[index]),
            scale=float(self.scales[index]),
            color=tuple(int(c) for c in self.colors[index]),
            rotation_phase=tuple(float(v) for v in self.phases[index]),
            category=self.category,
        )

    def __iter__(self) -> Iterator[ParticleRecord]:
        for i in range(len(self)):
            yield self.record(i)


@dataclass(frozen=True)
class ParticleField:
    """All populations, keyed by category, in draw order."""
    sets: Dict[ParticleCategory, ParticleSet]

    def __getitem__(self, category: ParticleCategory) -> ParticleSet:
        return self.sets[category]

    def __iter__(self) -> Iterator[ParticleSet]:
        return iter(self.sets.values())

    @property
    def total(self) -> int:
        return sum(len(s) for s in self.sets.values())


# ---- sampling helpers ----------------------------------------------------
def sample_sphere(rng: np.random.Generator, n: int, radius: float) -> np.ndarray:
    """Uniform points inside a ball (cube-root radius → uniform volume)."""
    theta = 2.0 * np.pi * rng.random(n)
    phi = np.arccos(2.0 * rng.random(n) - 1.0)
    r = np.cbrt(rng.random(n)) * radius
    return np.column_stack((
        r * np.sin(phi) * np.cos(theta),
        r * np.sin(phi) * np.sin(theta),
        r * np.cos(phi),
    ))


def cone_radius(y: np.ndarray, height: float, radius: float) -> np.ndarray:
    """Cone radius at height y, `radius` at the base (−h/2), 0 at the tip."""
    normalized = (y + height / 2.0) / height
    return radius * (1.0 - normalized)


def pick_colors(
    rng: np.random.Generator,
    n: int,
    palette: Sequence[RGB],
    weights: Optional[Sequence[float]] = None,
) -> np.ndarray:
    idx = rng.choice(len(palette), size=n, p=weights)
    return np.asarray(palette, dtype=np.uint8)[idx]


def uniform(rng: np.random.Generator, bounds: Tuple[float, float], shape) -> np.ndarray:
    low, high = bounds
    return rng.uniform(low, high, size=shape)


# ---- generator -----------------------------------------------------------
class ParticleFieldGenerator:
    """
    Parameters
    ----------
    rng : numpy.random.Generator
        The only randomness source; seed it for reproducible fields.
    leaf_count, ornament_count, ribbon_count : int
    height, radius : float
        Tree dimensions.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        leaf_count: int = LEAF_COUNT,
        ornament_count: int = ORNAMENT_COUNT,
        ribbon_count: int = RIBBON_COUNT,
        height: float = TREE_HEIGHT,
        radius: float = TREE_RADIUS,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._counts = {
            ParticleCategory.LEAF: leaf_count,
            ParticleCategory.ORNAMENT: ornament_count,
            ParticleCategory.RIBBON: ribbon_count,
        }
        self._height = height
        self._radius = radius

    # ------------------------------------------------------------------
    def generate(self) -> ParticleField:
        field = ParticleField({
            ParticleCategory.LEAF: self._leaves(self._counts[ParticleCategory.LEAF]),
            ParticleCategory.ORNAMENT: self._ornaments(self._counts[ParticleCategory.ORNAMENT]),
            ParticleCategory.RIBBON: self._ribbon(self._counts[ParticleCategory.RIBBON]),
        })
        logger.info(
            "generated %d particles (%s)", field.total,
            ", ".join(f"{s.category.value.lower()}={len(s)}" for s in field),
        )
        return field

    # ------------------------------------------------------------------
    def _leaves(self, n: int) -> ParticleSet:
        rng, h = self._rng, self._height
        y = (rng.random(n) - 0.5) * h
        angle = rng.random(n) * 2.0 * np.pi
        r = np.sqrt(rng.random(n)) * cone_radius(y, h, self._radius)

        return ParticleSet(
            category=ParticleCategory.LEAF,
            assembled=np.column_stack((r * np.cos(angle), y, r * np.sin(angle))),
            exploded=sample_sphere(rng, n, LEAF_SPHERE_RADIUS),
            scales=uniform(rng, LEAF_SCALE, n),
            colors=pick_colors(rng, n, (HOT_PINK, LIGHT_PINK), (0.4, 0.6)),
            phases=rng.random((n, 3)) * np.pi,
        )

    def _ornaments(self, n: int) -> ParticleSet:
        rng, h = self._rng, self._height
        y = (rng.random(n) - 0.5) * h
        r = cone_radius(y, h, self._radius) * ORNAMENT_RADIUS_FACTOR
        angle = rng.random(n) * 2.0 * np.pi

        phases = rng.random((n, 3)) * np.pi
        phases[:, 2] = 0.0

        return ParticleSet(
            category=ParticleCategory.ORNAMENT,
            assembled=np.column_stack((r * np.cos(angle), y, r * np.sin(angle))),
            exploded=sample_sphere(rng, n, ORNAMENT_SPHERE_RADIUS),
            scales=uniform(rng, ORNAMENT_SCALE, n),
            colors=pick_colors(rng, n, (LAVENDER, WHITE)),
            phases=phases,
        )

    def _ribbon(self, n: int) -> ParticleSet:
        rng, h = self._rng, self._height
        t = np.arange(n) / max(n, 1)
        y = -h / 2.0 + t * h
        r = self._radius * (1.0 - t) + RIBBON_OFFSET
        angle = t * 2.0 * np.pi * RIBBON_TURNS
        jitter = (rng.random((n, 3)) - 0.5) * RIBBON_JITTER

        assembled = np.column_stack((r * np.cos(angle), y, r * np.sin(angle))) + jitter

        return ParticleSet(
            category=ParticleCategory.RIBBON,
            assembled=assembled,
            exploded=sample_sphere(rng, n, RIBBON_SPHERE_RADIUS),
            scales=uniform(rng, RIBBON_SCALE, n),
            colors=pick_colors(rng, n, (WHITE,)),
            phases=rng.random((n, 3)),
        )
