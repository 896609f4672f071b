"""
Minimal pinhole camera used by the 2D scene view.

Applies the parent group transform (yaw + offset) to local particle
positions and projects world points to widget pixels.
"""
from __future__ import annotations
import math
from typing import Tuple

import numpy as np

from domain.models import Vec3
from utils.constants import CAMERA_FOV, CAMERA_MAX_DISTANCE, CAMERA_MIN_DISTANCE, CAMERA_POSITION
from utils.geometry import clamp


def group_to_world(local: np.ndarray, yaw: float, offset: Vec3, out: np.ndarray | None = None) -> np.ndarray:
    """Rotate (N, 3) points about +Y by `yaw`, then translate by `offset`."""
    if out is None:
        out = np.empty_like(local)
    c, s = math.cos(yaw), math.sin(yaw)
    x = local[:, 0]
    z = local[:, 2]
    # x' = x·cos + z·sin ; z' = −x·sin + z·cos  (right-handed yaw)
    out[:, 0] = x * c + z * s + offset[0]
    out[:, 1] = local[:, 1] + offset[1]
    out[:, 2] = -x * s + z * c + offset[2]
    return out


class PerspectiveCamera:
    """
    Parameters
    ----------
    position : Vec3
        Eye position; the camera looks down −Z.
    fov : float
        Vertical field of view in degrees.
    near : float
        Points closer than this (or behind the eye) are culled.
    min_distance, max_distance : float
        Zoom limits for the eye's distance from the origin.
    """

    def __init__(
        self,
        position: Vec3 = CAMERA_POSITION,
        fov: float = CAMERA_FOV,
        near: float = 0.1,
        min_distance: float = CAMERA_MIN_DISTANCE,
        max_distance: float = CAMERA_MAX_DISTANCE,
    ) -> None:
        self.position = np.asarray(position, dtype=np.float64)
        self.fov = fov
        self.near = near
        self.min_distance = min_distance
        self.max_distance = max_distance

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position))

    def dolly(self, factor: float) -> float:
        """Scale the eye's distance from the origin, within the zoom limits."""
        current = self.distance
        target = clamp(current * factor, self.min_distance, self.max_distance)
        self.position = self.position * (target / current)
        return target

    def focal_length(self, height: int) -> float:
        return (height / 2.0) / math.tan(math.radians(self.fov) / 2.0)

    def project(self, world: np.ndarray, width: int, height: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Returns
        -------
        (screen, depth, visible)
            screen  : (N, 2) pixel coordinates, y pointing down
            depth   : (N,) distance along the view axis
            visible : (N,) bool mask of points in front of the near plane
        """
        rel = world - self.position
        depth = -rel[:, 2]
        visible = depth > self.near
        safe = np.where(visible, depth, 1.0)

        f = self.focal_length(height)
        screen = np.empty((len(world), 2), dtype=np.float64)
        screen[:, 0] = width / 2.0 + rel[:, 0] * f / safe
        screen[:, 1] = height / 2.0 - rel[:, 1] * f / safe
        return screen, depth, visible
