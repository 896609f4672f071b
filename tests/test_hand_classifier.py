import math

import numpy as np
import pytest

from core.hand_classifier import HandPoseClassifier
from domain.enums import Gesture
from tests.helpers import make_landmarks


def test_no_hand_starts_centered():
    sample = HandPoseClassifier().classify(None)
    assert sample.hand_detected is False
    assert sample.gesture is Gesture.NONE
    assert sample.pointer == (0.5, 0.5)


@pytest.mark.parametrize("seed", range(5))
def test_pinch_at_distance_004_regardless_of_other_landmarks(seed):
    rng = np.random.default_rng(seed)
    hand = make_landmarks(thumb=(0.40, 0.60, 0.0), index=(0.44, 0.60, 0.0), rng=rng)
    sample = HandPoseClassifier().classify(hand)
    assert sample.hand_detected
    assert sample.gesture is Gesture.PINCH


@pytest.mark.parametrize("seed", range(5))
def test_open_at_distance_006_regardless_of_other_landmarks(seed):
    rng = np.random.default_rng(seed)
    hand = make_landmarks(thumb=(0.40, 0.60, 0.0), index=(0.46, 0.60, 0.0), rng=rng)
    assert HandPoseClassifier().classify(hand).gesture is Gesture.OPEN


def test_distance_is_measured_in_3d():
    # 0.03 apart in x (a pinch in 2D) but 0.045 apart in z
    hand = make_landmarks(thumb=(0.5, 0.5, 0.0), index=(0.53, 0.5, 0.045))
    assert HandPoseClassifier().classify(hand).gesture is Gesture.OPEN


def test_hard_threshold_flips_each_frame():
    clf = HandPoseClassifier()
    near = make_landmarks(index=(0.549, 0.5, 0.0))
    far = make_landmarks(index=(0.551, 0.5, 0.0))
    gestures = [clf.classify(h).gesture for h in (near, far, near, far)]
    assert gestures == [Gesture.PINCH, Gesture.OPEN, Gesture.PINCH, Gesture.OPEN]


def test_pointer_uses_mcp_mirrored():
    hand = make_landmarks(mcp=(0.2, 0.7, -0.1))
    sample = HandPoseClassifier().classify(hand)
    assert sample.pointer == pytest.approx((0.8, 0.7))


def test_pointer_is_clamped():
    hand = make_landmarks(mcp=(-0.1, 1.2, 0.0))
    assert HandPoseClassifier().classify(hand).pointer == (1.0, 1.0)


def test_lost_hand_keeps_last_pointer():
    clf = HandPoseClassifier()
    clf.classify(make_landmarks(mcp=(0.25, 0.4, 0.0)))
    sample = clf.classify(None)
    assert not sample.hand_detected
    assert sample.pointer == pytest.approx((0.75, 0.4))


@pytest.mark.parametrize("landmarks", [
    [],
    make_landmarks()[:20],
    [(0.1, 0.2)] * 21,
    [("a", "b", "c")] * 21,
    make_landmarks(thumb=(math.nan, 0.5, 0.0)),
    make_landmarks(index=(math.inf, 0.5, 0.0)),
    42,
])
def test_malformed_input_is_no_hand(landmarks):
    sample = HandPoseClassifier().classify(landmarks)
    assert sample.hand_detected is False
    assert sample.gesture is Gesture.NONE


def test_accepts_numpy_array():
    hand = np.asarray(make_landmarks(index=(0.52, 0.5, 0.0)))
    assert HandPoseClassifier().classify(hand).gesture is Gesture.PINCH


def test_custom_threshold():
    hand = make_landmarks(index=(0.58, 0.5, 0.0))
    assert HandPoseClassifier(pinch_threshold=0.1).classify(hand).gesture is Gesture.PINCH
