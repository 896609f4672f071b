import time

import numpy as np
import pytest
from PyQt6.QtCore import QCoreApplication, Qt

import app.sensor_worker as sensor_worker
from app.config import AppConfig
from app.sensor_worker import SensorWorker
from core.gesture_cell import LatestGestureCell
from core.gesture_feed import GestureFeed
from domain.errors import SensorUnavailableError
from tests.helpers import make_landmarks

FRAME = np.zeros((24, 32, 3), dtype=np.uint8)


@pytest.fixture(scope="module")
def qapp():
    return QCoreApplication.instance() or QCoreApplication([])


class FakeCamera:
    instances = []
    init_delay = 0.0
    fail_open = False
    fail_read = False

    def __init__(self, *args, **kwargs):
        time.sleep(self.init_delay)
        if self.fail_open:
            raise SensorUnavailableError("Webcam 0 could not be opened")
        self.released = False
        self.failed_reads = 0
        type(self).instances.append(self)

    def read(self):
        time.sleep(0.005)
        if self.fail_read:
            raise RuntimeError("device unplugged")
        return FRAME.copy()

    def release(self):
        self.released = True


class FakeTracker:
    instances = []
    failures = 0

    def __init__(self, **kwargs):
        self.calls = 0
        self.released = False
        type(self).instances.append(self)

    def process(self, frame):
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError("bad tensor")
        return make_landmarks()

    def release(self):
        self.released = True


class RecordingFeed(GestureFeed):

    def __init__(self, cell):
        super().__init__(cell)
        self.samples = []

    def submit(self, landmarks):
        sample = super().submit(landmarks)
        self.samples.append(sample)
        return sample


@pytest.fixture
def sensors(monkeypatch):
    class Camera(FakeCamera):
        instances = []

    class Tracker(FakeTracker):
        instances = []

    monkeypatch.setattr(sensor_worker, "Camera", Camera)
    monkeypatch.setattr(sensor_worker, "HandTracker", Tracker)
    return Camera, Tracker


def _worker(feed):
    worker = SensorWorker(AppConfig(show_camera_preview=False), feed)
    log = {"status": [], "available": []}
    direct = Qt.ConnectionType.DirectConnection
    worker.status_msg.connect(log["status"].append, direct)
    worker.availability_changed.connect(log["available"].append, direct)
    return worker, log


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            return False
        time.sleep(0.01)
    return True


def test_unavailable_camera_reports_and_idles_the_scene(qapp, sensors):
    Camera, _ = sensors
    Camera.fail_open = True
    cell = LatestGestureCell()
    feed = GestureFeed(cell)
    worker, log = _worker(feed)

    worker.start()
    assert worker.wait(3000)

    assert log["available"] == [False]
    assert any(m.startswith("[ERROR]") for m in log["status"])
    assert not feed.available
    assert cell.closed
    assert not cell.latest().hand_detected


def test_tracker_errors_count_as_no_hand(qapp, sensors):
    _, Tracker = sensors
    Tracker.failures = 3
    cell = LatestGestureCell()
    feed = RecordingFeed(cell)
    worker, log = _worker(feed)

    worker.start()
    try:
        assert _wait_for(lambda: any(s.is_open for s in list(feed.samples)))
    finally:
        worker.stop()

    assert all(not s.hand_detected for s in feed.samples[:3])
    assert feed.available
    assert log["available"] == [True]
    warnings = [m for m in log["status"] if m.startswith("[WARN] Landmark model error")]
    assert len(warnings) == 1


def test_stop_during_startup_releases_sensors(qapp, sensors):
    Camera, Tracker = sensors
    Camera.init_delay = 0.5
    feed = GestureFeed(LatestGestureCell())
    worker, log = _worker(feed)

    worker.start()
    time.sleep(0.1)
    worker.stop()

    assert worker.isFinished()
    assert log["available"] == []
    assert [c.released for c in Camera.instances] == [True]
    assert [t.released for t in Tracker.instances] == [True]
    assert Tracker.instances[0].calls == 0


def test_camera_failure_mid_run_releases_and_reports(qapp, sensors):
    Camera, Tracker = sensors
    Camera.fail_read = True
    cell = LatestGestureCell()
    feed = GestureFeed(cell)
    worker, log = _worker(feed)

    worker.start()
    assert worker.wait(3000)

    assert log["available"] == [True, False]
    assert any("device unplugged" in m for m in log["status"] if m.startswith("[ERROR]"))
    assert Camera.instances[0].released
    assert Tracker.instances[0].released
    assert not feed.available
    assert cell.closed
