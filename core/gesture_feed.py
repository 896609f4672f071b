"""
GestureFeed — sensor-side half of the pipeline:

    landmarks → HandPoseClassifier → LatestGestureCell

Runs on the sensor thread. Every failure on this side ends up as a plain
"no hand" sample; nothing raised here reaches the render tick.
"""
from __future__ import annotations
import logging
from typing import Optional, Sequence

from core.gesture_cell import LatestGestureCell
from core.hand_classifier import HandPoseClassifier
from domain.models import GestureSample

logger = logging.getLogger(__name__)


class GestureFeed:
    """
    Parameters
    ----------
    cell : LatestGestureCell
        Where samples are published for the render tick.
    classifier : HandPoseClassifier
    """

    def __init__(
        self,
        cell: LatestGestureCell,
        classifier: Optional[HandPoseClassifier] = None,
    ) -> None:
        self._cell = cell
        self._classifier = classifier or HandPoseClassifier()
        self._available = True
        self._last: GestureSample = cell.latest()

    # ------------------------------------------------------------------
    def submit(self, landmarks: Optional[Sequence]) -> GestureSample:
        """Classify one frame's landmarks (or None) and publish the result."""
        sample = self._classifier.classify(landmarks)
        if sample.gesture != self._last.gesture or sample.hand_detected != self._last.hand_detected:
            logger.debug("gesture %s → %s", self._last.gesture.value, sample.gesture.value)
        self._last = sample
        self._cell.publish(sample)
        return sample

    def mark_unavailable(self, reason: str) -> None:
        """
        Camera or model could not start. Publishes a final "no hand" sample
        and closes the cell so the scene idles from here on.
        """
        logger.warning("hand tracking unavailable: %s", reason)
        self._available = False
        self._cell.publish(GestureSample.no_hand(self._classifier.last_pointer))
        self._cell.close()

    def shutdown(self) -> None:
        self._cell.close()

    @property
    def available(self) -> bool:
        return self._available

    @property
    def last_sample(self) -> GestureSample:
        return self._last
