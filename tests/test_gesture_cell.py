import threading

from core.gesture_cell import LatestGestureCell
from core.gesture_feed import GestureFeed
from domain.enums import Gesture
from domain.models import GestureSample
from tests.helpers import make_landmarks, open_hand, pinch


def test_starts_with_no_hand():
    cell = LatestGestureCell()
    snap = cell.snapshot()
    assert snap.sequence == 0
    assert snap.sample == GestureSample.no_hand()


def test_latest_wins():
    cell = LatestGestureCell()
    cell.publish(pinch())
    cell.publish(open_hand(0.9))
    snap = cell.snapshot()
    assert snap.sequence == 2
    assert snap.sample == open_hand(0.9)


def test_reading_does_not_consume():
    cell = LatestGestureCell()
    cell.publish(pinch())
    assert cell.snapshot() == cell.snapshot()
    assert cell.latest() is cell.latest()


def test_closed_cell_freezes_last_sample():
    cell = LatestGestureCell()
    cell.publish(open_hand(0.1))
    cell.close()
    assert cell.publish(pinch()) is False
    assert cell.latest() == open_hand(0.1)
    assert cell.snapshot().sequence == 1
    cell.close()  # idempotent
    assert cell.closed


def test_concurrent_writer_never_tears_reads():
    cell = LatestGestureCell()
    samples = [open_hand(i / 1000) for i in range(1000)]
    done = threading.Event()

    def writer():
        for s in samples:
            cell.publish(s)
        done.set()

    t = threading.Thread(target=writer)
    t.start()
    last_seq = 0
    while not done.is_set():
        snap = cell.snapshot()
        assert snap.sequence >= last_seq
        if snap.sequence:
            # the sequence and the sample always belong to the same publication
            assert snap.sample is samples[snap.sequence - 1]
        last_seq = snap.sequence
    t.join()
    assert cell.snapshot().sequence == 1000
    assert cell.latest() is samples[-1]


# ---- GestureFeed ----------------------------------------------------------

def test_feed_publishes_classified_samples():
    cell = LatestGestureCell()
    feed = GestureFeed(cell)
    sample = feed.submit(make_landmarks(index=(0.52, 0.5, 0.0)))
    assert sample.gesture is Gesture.PINCH
    assert cell.latest() is sample


def test_feed_turns_garbage_into_no_hand():
    cell = LatestGestureCell()
    feed = GestureFeed(cell)
    feed.submit(make_landmarks())
    sample = feed.submit([(0.1, 0.1, 0.1)] * 3)
    assert not sample.hand_detected
    assert cell.latest() == sample


def test_unavailable_feed_closes_cell_with_no_hand():
    cell = LatestGestureCell()
    cell.publish(open_hand(0.9))
    feed = GestureFeed(cell)
    feed.mark_unavailable("camera blocked")
    assert not feed.available
    assert cell.closed
    assert not cell.latest().hand_detected

    feed.submit(make_landmarks())
    assert not cell.latest().hand_detected


def test_shutdown_stops_publication():
    cell = LatestGestureCell()
    feed = GestureFeed(cell)
    feed.submit(make_landmarks(index=(0.52, 0.5, 0.0)))
    feed.shutdown()
    feed.submit(make_landmarks())
    assert cell.latest().gesture is Gesture.PINCH
