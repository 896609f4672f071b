"""
ParticleAnimator — per-tick transforms for every particle.

All math is vectorised per category and written into buffers allocated
once in __init__, so a tick allocates no per-particle memory. The anchors
themselves are only ever read.
"""
from __future__ import annotations
from typing import Dict

import numpy as np

from domain.enums import ParticleCategory
from domain.models import CategoryTransforms, FrameTransforms, Vec3
from scene.particle_field import ParticleField, ParticleSet
from utils.constants import (
    DEFAULT_NOISE_AMPLITUDE,
    EXPLODED_SCALE,
    EXPLODED_SPIN_BOOST,
    GROUP_OFFSET,
    LEAF_NOISE_AMPLITUDE,
    NOISE_FREQUENCY,
    SPIN_X,
    SPIN_Y,
)
from utils.geometry import clamp, lerp

NOISE_AMPLITUDE: Dict[ParticleCategory, float] = {
    ParticleCategory.LEAF:     LEAF_NOISE_AMPLITUDE,
    ParticleCategory.ORNAMENT: DEFAULT_NOISE_AMPLITUDE,
    ParticleCategory.RIBBON:   DEFAULT_NOISE_AMPLITUDE,
}


class _CategoryBuffers:
    """Scratch and output arrays for one population."""

    def __init__(self, particles: ParticleSet) -> None:
        n = len(particles)
        self.particles = particles
        self.amplitude = NOISE_AMPLITUDE[particles.category]

        self.delta = particles.exploded - particles.assembled
        self.delta.setflags(write=False)
        self.index = np.arange(n, dtype=np.float64)
        self.scratch = np.empty(n, dtype=np.float64)

        self.out = CategoryTransforms(
            positions=np.empty((n, 3), dtype=np.float64),
            rotations=np.empty((n, 3), dtype=np.float64),
            scales=np.empty(n, dtype=np.float64),
        )

    def fill(self, blend: float, elapsed: float) -> CategoryTransforms:
        p = self.particles
        pos = self.out.positions
        rot = self.out.rotations

        # 1. anchor interpolation
        np.multiply(self.delta, blend, out=pos)
        np.add(pos, p.assembled, out=pos)

        # 2. vertical float, phase-shifted by particle index
        np.add(self.index, elapsed * NOISE_FREQUENCY, out=self.scratch)
        np.sin(self.scratch, out=self.scratch)
        np.multiply(self.scratch, self.amplitude, out=self.scratch)
        np.add(pos[:, 1], self.scratch, out=pos[:, 1])

        # 3. spin speeds up as the field explodes
        spin = 1.0 + EXPLODED_SPIN_BOOST * blend
        np.add(p.phases[:, 0], elapsed * SPIN_X * spin, out=rot[:, 0])
        np.add(p.phases[:, 1], elapsed * SPIN_Y * spin, out=rot[:, 1])
        np.copyto(rot[:, 2], p.phases[:, 2])

        # 4. shrink toward half size
        np.multiply(p.scales, lerp(1.0, EXPLODED_SCALE, blend), out=self.out.scales)

        return self.out


class ParticleAnimator:
    """
    Parameters
    ----------
    field : ParticleField
        Shared, read-only particle data.
    group_offset : Vec3
        Translation of the parent group the field hangs from.
    """

    def __init__(self, field: ParticleField, group_offset: Vec3 = GROUP_OFFSET) -> None:
        self._buffers = {s.category: _CategoryBuffers(s) for s in field}
        self._frame = FrameTransforms(
            categories={c: b.out for c, b in self._buffers.items()},
            group_offset=group_offset,
        )

    # ------------------------------------------------------------------
    def animate(self, blend: float, elapsed: float, group_rotation: float = 0.0) -> FrameTransforms:
        """
        Compute this tick's transforms.

        The returned FrameTransforms (and its arrays) is the same object
        every call; it is overwritten on the next tick.
        """
        blend = clamp(blend)
        for buffers in self._buffers.values():
            buffers.fill(blend, elapsed)

        frame = self._frame
        frame.blend = blend
        frame.elapsed = elapsed
        frame.group_rotation = group_rotation
        return frame
