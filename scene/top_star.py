"""
TopStar — the star crowning the tree.

Bobs, rolls and pulses on its own clock. It follows the discrete scene mode
rather than the blend: exploded means it tumbles, assembled means its pitch
relaxes back upright.
"""
from __future__ import annotations
import math

from domain.enums import SceneMode
from domain.models import StarTransform
from utils.constants import (
    STAR_BOB_AMPLITUDE,
    STAR_EXPLODED_PITCH_SPIN,
    STAR_EXPLODED_YAW_SPIN,
    STAR_HEIGHT,
    STAR_IDLE_SPIN,
    STAR_PITCH_RELAX_RATE,
)
from utils.geometry import damp


class TopStar:

    def __init__(self, height: float = STAR_HEIGHT) -> None:
        self._height = height
        self._pitch = 0.0
        self._yaw = 0.0
        self._transform = StarTransform(position=(0.0, height, 0.0))

    def update(self, mode: SceneMode, elapsed: float, dt: float) -> StarTransform:
        dt = max(dt, 0.0)
        self._yaw += dt * STAR_IDLE_SPIN

        if mode is SceneMode.EXPLODED:
            self._pitch += dt * STAR_EXPLODED_PITCH_SPIN
            self._yaw += dt * STAR_EXPLODED_YAW_SPIN
        else:
            self._pitch = damp(self._pitch, 0.0, STAR_PITCH_RELAX_RATE, dt)

        roll = math.sin(elapsed) * 0.1
        pulse = (math.sin(elapsed * 3.0) + 1.0) * 0.5

        t = self._transform
        t.position = (0.0, self._height + math.sin(elapsed * 2.0) * STAR_BOB_AMPLITUDE, 0.0)
        t.rotation = (self._pitch, self._yaw, roll)
        t.emissive_intensity = 1.0 + pulse * 2.0
        return t

    @property
    def transform(self) -> StarTransform:
        return self._transform
