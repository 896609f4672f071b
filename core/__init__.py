from core.gesture_cell import LatestGestureCell, PublishedSample
from core.gesture_feed import GestureFeed
from core.hand_classifier import HandPoseClassifier
from core.mode_controller import ModeController
from core.rotation_controller import RotationController
from core.scene_controller import SceneController

# Camera and HandTracker pull in OpenCV / MediaPipe; import them from their
# modules directly.

__all__ = [
    "LatestGestureCell",
    "PublishedSample",
    "GestureFeed",
    "HandPoseClassifier",
    "ModeController",
    "RotationController",
    "SceneController",
]
