from __future__ import annotations
from dataclasses import dataclass

from utils import constants as C


@dataclass
class AppConfig:
    """
    Central configuration injected into all components.
    Algorithm constants live in utils.constants; this is what you tune.
    """
    # ---- camera --------------------------------------------------------
    camera_device: int = 0
    fps_limit: int = 30
    capture_width: int = 320
    capture_height: int = 240

    # ---- hand tracker --------------------------------------------------
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # ---- classifier ----------------------------------------------------
    pinch_threshold: float = C.PINCH_THRESHOLD

    # ---- mode / rotation -----------------------------------------------
    blend_rate: float = C.BLEND_RATE
    gesture_rotation_rate: float = C.GESTURE_ROTATION_RATE
    idle_rotation_rate: float = C.IDLE_ROTATION_RATE
    idle_angular_velocity: float = C.IDLE_ANGULAR_VELOCITY
    max_angular_velocity: float = C.MAX_ANGULAR_VELOCITY

    # ---- particle field ------------------------------------------------
    seed: int | None = 2024
    leaf_count: int = C.LEAF_COUNT
    ornament_count: int = C.ORNAMENT_COUNT
    ribbon_count: int = C.RIBBON_COUNT
    snow_count: int = C.SNOW_COUNT

    # ---- render loop ---------------------------------------------------
    tick_interval_ms: int = 16
    show_camera_preview: bool = True


# Default singleton: import it directly, or build your own in tests.
default_config = AppConfig()
