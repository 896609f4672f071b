"""
Webcam source for the hand tracker.

Frames come out paced to ``fps_limit`` so the landmark model never runs
faster than it needs to; the render loop does not depend on this rate.
"""
from __future__ import annotations
import logging
import time
from typing import Optional, Tuple

import cv2
import numpy as np

from domain.errors import SensorUnavailableError

logger = logging.getLogger(__name__)


class Camera:
    """
    Parameters
    ----------
    device : int
        Webcam index (0 = system default).
    fps_limit : int
        Upper bound on frames handed to the tracker per second.
    width, height : int
        Requested capture size; the driver may choose another one, see
        ``resolution``.

    Raises
    ------
    SensorUnavailableError
        Device missing, busy or blocked by permissions.
    """

    def __init__(self, device: int = 0, fps_limit: int = 30, width: int = 320, height: int = 240) -> None:
        if fps_limit <= 0:
            raise ValueError(f"fps_limit must be positive, got {fps_limit}")

        cap = cv2.VideoCapture(device)
        if not cap.isOpened():
            cap.release()
            raise SensorUnavailableError(f"Webcam {device} could not be opened")

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

        self._cap = cap
        self._period = 1.0 / fps_limit
        self._due = time.monotonic()
        self._failed_reads = 0
        logger.info("webcam %d open at %dx%d, %d fps cap", device, *self.resolution, fps_limit)

    @property
    def resolution(self) -> Tuple[int, int]:
        return (
            int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        )

    @property
    def failed_reads(self) -> int:
        """Consecutive reads that returned no frame."""
        return self._failed_reads

    def read(self) -> Optional[np.ndarray]:
        """Next BGR frame once it is due, or None if the driver gave nothing."""
        now = time.monotonic()
        if now < self._due:
            time.sleep(self._due - now)
        self._due = max(self._due + self._period, time.monotonic())

        ok, frame = self._cap.read()
        if not ok:
            self._failed_reads += 1
            return None
        self._failed_reads = 0
        return frame

    def release(self) -> None:
        self._cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, *_) -> None:
        self.release()
