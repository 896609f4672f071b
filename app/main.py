"""
main.py — Application entry point.

    SensorWorker (QThread): Camera → HandTracker → HandPoseClassifier
                                                    ↓ publish
                                            LatestGestureCell
                                                    ↓ read every tick
    SceneWindow (GUI thread): SceneController → ParticleAnimator → canvas

Run with ``python -m app.main``.
"""
from __future__ import annotations
import logging
import sys

import numpy as np
from PyQt6.QtWidgets import QApplication

from app.config import AppConfig, default_config
from app.scene_window import SceneWindow
from app.sensor_worker import SensorWorker
from core.gesture_cell import LatestGestureCell
from core.gesture_feed import GestureFeed
from core.hand_classifier import HandPoseClassifier
from core.mode_controller import ModeController
from core.rotation_controller import RotationController
from core.scene_controller import SceneController
from scene.backdrop import build_backdrop
from scene.particle_field import ParticleField, ParticleFieldGenerator
from scene.snowfall import Snowfall
from scene.top_star import TopStar

logger = logging.getLogger(__name__)


def build_scene(config: AppConfig, cell: LatestGestureCell) -> tuple[SceneController, ParticleField]:
    """Generate the field and wire the render-side controllers."""
    rng = np.random.default_rng(config.seed)
    field = ParticleFieldGenerator(
        rng,
        leaf_count=config.leaf_count,
        ornament_count=config.ornament_count,
        ribbon_count=config.ribbon_count,
    ).generate()

    scene = SceneController(
        field,
        cell,
        mode=ModeController(rate=config.blend_rate),
        rotation=RotationController(
            gesture_rate=config.gesture_rotation_rate,
            idle_rate=config.idle_rotation_rate,
            idle_velocity=config.idle_angular_velocity,
            max_velocity=config.max_angular_velocity,
        ),
        star=TopStar(),
        snow=Snowfall(rng, config.snow_count),
    )
    return scene, field


def run(config: AppConfig = default_config) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger.info("seed=%s  fps cap=%d  tick=%dms", config.seed, config.fps_limit, config.tick_interval_ms)

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    cell = LatestGestureCell()
    scene, field = build_scene(config, cell)
    feed = GestureFeed(cell, HandPoseClassifier(config.pinch_threshold))

    backdrop = build_backdrop(np.random.default_rng(config.seed))

    window = SceneWindow(scene, field, backdrop, config.tick_interval_ms)
    worker = SensorWorker(config, feed)
    worker.frame_ready.connect(window.on_frame)
    worker.availability_changed.connect(window.on_availability)
    worker.status_msg.connect(window.on_status)

    def shutdown() -> None:
        window.stop()
        worker.stop()
        scene.teardown()

    app.aboutToQuit.connect(shutdown)

    window.show()
    worker.start()

    code = app.exec()
    logger.info("application closed cleanly")
    return code


if __name__ == "__main__":
    sys.exit(run())
