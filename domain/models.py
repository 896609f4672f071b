from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from domain.enums import Gesture, ParticleCategory

# Type aliases
Landmark3D = Tuple[float, float, float]
LandmarkSet = Sequence[Landmark3D]        # up to 21 points for one hand
Pointer = Tuple[float, float]
Vec3 = Tuple[float, float, float]
RGB = Tuple[int, int, int]

CENTER_POINTER: Pointer = (0.5, 0.5)


@dataclass(frozen=True)
class GestureSample:
    """
    Result of classifying one sensor frame.
    Published wholesale to the render tick, never mutated.
    """
    hand_detected: bool
    gesture: Gesture = Gesture.NONE
    pointer: Pointer = CENTER_POINTER

    @classmethod
    def no_hand(cls, pointer: Pointer = CENTER_POINTER) -> "GestureSample":
        return cls(hand_detected=False, gesture=Gesture.NONE, pointer=pointer)

    @property
    def is_open(self) -> bool:
        return self.hand_detected and self.gesture is Gesture.OPEN

    @property
    def is_pinch(self) -> bool:
        return self.hand_detected and self.gesture is Gesture.PINCH


@dataclass(frozen=True)
class ParticleRecord:
    """Per-particle generation data. Created once at startup."""
    anchor_assembled: Vec3
    anchor_exploded: Vec3
    scale: float
    color: RGB
    rotation_phase: Vec3
    category: ParticleCategory


@dataclass
class AnimationState:
    """
    Continuous scene state carried across render ticks.

    blend            : 0 = assembled, 1 = exploded (always within [0, 1])
    rotation_angle   : yaw of the whole field in radians, unbounded
    angular_velocity : rad/s
    elapsed          : seconds since the scene started
    """
    blend: float = 0.0
    rotation_angle: float = 0.0
    angular_velocity: float = 0.0
    elapsed: float = 0.0


@dataclass
class CategoryTransforms:
    """
    Per-instance transforms for one category, indexed by particle identity.
    The arrays are reused every tick; copy them to keep a snapshot.
    """
    positions: np.ndarray   # (N, 3)
    rotations: np.ndarray   # (N, 3) euler XYZ, radians
    scales: np.ndarray      # (N,)

    def __len__(self) -> int:
        return len(self.scales)


@dataclass
class StarTransform:
    """Transform and glow of the star sitting above the tree."""
    position: Vec3 = (0.0, 9.5, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    emissive_intensity: float = 2.0


@dataclass
class SnowFrame:
    positions: np.ndarray   # (N, 3) world space
    alphas: np.ndarray      # (N,) in [0, 1]
    sizes: np.ndarray       # (N,)


@dataclass
class FrameTransforms:
    """Everything the renderer needs for one tick."""
    categories: Dict[ParticleCategory, CategoryTransforms]
    group_rotation: float = 0.0
    group_offset: Vec3 = (0.0, 0.0, 0.0)
    blend: float = 0.0
    elapsed: float = 0.0
    star: Optional[StarTransform] = None
    snow: Optional[SnowFrame] = None

    def __getitem__(self, category: ParticleCategory) -> CategoryTransforms:
        return self.categories[category]
