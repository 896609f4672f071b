"""
HandPoseClassifier — turns one hand's landmarks into a GestureSample.
No buffer, no consensus, no hysteresis — each frame stands alone.
"""
from __future__ import annotations
import math
from typing import Optional, Sequence

from domain.enums import Gesture
from domain.models import CENTER_POINTER, GestureSample, Landmark3D, Pointer
from utils.constants import (
    INDEX_TIP,
    LANDMARK_COUNT,
    MIDDLE_MCP,
    PINCH_THRESHOLD,
    THUMB_TIP,
)
from utils.geometry import clamp, dist3


def _as_points(landmarks: Optional[Sequence]) -> Optional[list[Landmark3D]]:
    """
    Coerce a landmark set into a list of float triples.
    Returns None for anything that is not a complete, finite hand.
    """
    if landmarks is None:
        return None
    try:
        points = [(float(p[0]), float(p[1]), float(p[2])) for p in landmarks]
    except (TypeError, ValueError, IndexError):
        return None
    if len(points) < LANDMARK_COUNT:
        return None
    if not all(math.isfinite(c) for p in points for c in p):
        return None
    return points


class HandPoseClassifier:
    """
    Parameters
    ----------
    pinch_threshold : float
        Thumb-tip ↔ index-tip distance below which the hand is a PINCH.

    The last pointer seen is remembered so that "no hand" samples keep the
    cursor where the hand left it.
    """

    def __init__(self, pinch_threshold: float = PINCH_THRESHOLD) -> None:
        self._threshold = pinch_threshold
        self._last_pointer: Pointer = CENTER_POINTER

    # ------------------------------------------------------------------
    def classify(self, landmarks: Optional[Sequence]) -> GestureSample:
        """
        Parameters
        ----------
        landmarks : sequence of (x, y, z) or None
            Normalized landmarks of a single hand as produced by the
            tracker, or None when no hand was found.

        Returns
        -------
        GestureSample
            Malformed or incomplete input yields a "no hand" sample.
        """
        points = _as_points(landmarks)
        if points is None:
            return GestureSample.no_hand(self._last_pointer)

        gesture = self.gesture_for(points[THUMB_TIP], points[INDEX_TIP])

        ref_x, ref_y, _ = points[MIDDLE_MCP]
        pointer = (clamp(1.0 - ref_x), clamp(ref_y))
        self._last_pointer = pointer

        return GestureSample(hand_detected=True, gesture=gesture, pointer=pointer)

    def gesture_for(self, thumb_tip: Landmark3D, index_tip: Landmark3D) -> Gesture:
        """Hard threshold on the fingertip distance."""
        if dist3(thumb_tip, index_tip) < self._threshold:
            return Gesture.PINCH
        return Gesture.OPEN

    @property
    def last_pointer(self) -> Pointer:
        return self._last_pointer
