"""
LatestGestureCell — single-slot, latest-wins exchange between the sensor
thread (one writer) and the render tick (one reader).

The slot holds an immutable snapshot that is swapped wholesale under a lock,
so a reader can never observe half of an update. Readers never wait for a
new value; they just get whatever is there.
"""
from __future__ import annotations
import logging
import threading
from dataclasses import dataclass

from domain.models import GestureSample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedSample:
    """A sample plus the publication counter it was stored under."""
    sequence: int
    sample: GestureSample


class LatestGestureCell:

    def __init__(self, initial: GestureSample | None = None) -> None:
        self._lock = threading.Lock()
        self._slot = PublishedSample(0, initial or GestureSample.no_hand())
        self._closed = False

    # ------------------------------------------------------------------
    def publish(self, sample: GestureSample) -> bool:
        """
        Replace the current sample.
        Returns False (and drops the sample) once the cell is closed.
        """
        with self._lock:
            if self._closed:
                return False
            self._slot = PublishedSample(self._slot.sequence + 1, sample)
            return True

    def snapshot(self) -> PublishedSample:
        """The latest sample and its sequence number. Never blocks on the writer."""
        with self._lock:
            return self._slot

    def latest(self) -> GestureSample:
        return self.snapshot().sample

    def close(self) -> None:
        """Freeze the current sample; later publications are ignored."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        logger.info("gesture cell closed at sequence %d", self._slot.sequence)

    @property
    def closed(self) -> bool:
        return self._closed
