"""
SensorWorker — corre cámara + modelo de landmarks + clasificador en un
QThread y publica cada GestureSample en la celda compartida.

El render nunca espera a este hilo: sólo lee el último valor publicado.
"""
from __future__ import annotations
import logging
import time
from typing import Optional

import numpy as np
from PyQt6.QtCore import QThread, pyqtSignal

from app.config import AppConfig
from core.camera import Camera
from core.gesture_feed import GestureFeed
from core.hand_tracker import HandTracker
from domain.errors import SensorUnavailableError

logger = logging.getLogger(__name__)


class SensorWorker(QThread):
    """
    QThread del pipeline de visión.

    Señales:
        frame_ready          — frame BGR con la mano dibujada (preview)
        availability_changed — False si cámara o modelo fallan
        status_msg           — línea de log para la UI

    stop() puede llegar en cualquier momento, incluso mientras se carga el
    modelo; run() siempre termina liberando cámara y modelo.
    """

    frame_ready          = pyqtSignal(np.ndarray)
    availability_changed = pyqtSignal(bool)
    status_msg           = pyqtSignal(str)

    def __init__(self, config: AppConfig, feed: GestureFeed, parent=None) -> None:
        super().__init__(parent)
        self._config = config
        self._feed   = feed

        # Se crean en run() para vivir en el hilo correcto
        self._camera:  Optional[Camera]      = None
        self._tracker: Optional[HandTracker] = None

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Bucle principal — corre en el hilo del worker."""
        try:
            try:
                self._open_sensors()
            except SensorUnavailableError as exc:
                self._report_unavailable(str(exc))
                return

            # stop() llegó mientras se cargaba el modelo
            if self.isInterruptionRequested():
                return

            self.availability_changed.emit(True)
            self.status_msg.emit("Hand tracking started")
            self._loop()
        except Exception as exc:
            # cámara desconectada, error del driver...
            logger.exception("sensor loop aborted")
            self._report_unavailable(f"Sensor failed: {exc}")
        finally:
            self._cleanup()

    def _open_sensors(self) -> None:
        cfg = self._config
        self._camera = Camera(
            cfg.camera_device, cfg.fps_limit, cfg.capture_width, cfg.capture_height,
        )
        self._tracker = HandTracker(
            min_detection_confidence=cfg.min_detection_confidence,
            min_tracking_confidence=cfg.min_tracking_confidence,
            draw=cfg.show_camera_preview,
        )

    def _loop(self) -> None:
        tracker_failed = False

        while not self.isInterruptionRequested():
            frame = self._camera.read()
            if frame is None:
                if self._camera.failed_reads == 1:
                    self.status_msg.emit("[WARN] Empty frame, retrying")
                time.sleep(0.05)
                continue

            try:
                landmarks = self._tracker.process(frame)
            except Exception as exc:
                # a bad frame counts as "no hand", never as a crash
                if not tracker_failed:
                    logger.exception("landmark model failed on a frame")
                    self.status_msg.emit(f"[WARN] Landmark model error: {exc}")
                    tracker_failed = True
                landmarks = None

            self._feed.submit(landmarks)

            if self._config.show_camera_preview:
                # copia para thread-safety
                self.frame_ready.emit(frame.copy())

    def _report_unavailable(self, reason: str) -> None:
        self.status_msg.emit(f"[ERROR] {reason}")
        self._feed.mark_unavailable(reason)
        self.availability_changed.emit(False)

    # ------------------------------------------------------------------
    def stop(self) -> None:
        """Detiene el hilo; la escena sigue con la última muestra congelada."""
        self.requestInterruption()
        self._feed.shutdown()
        if not self.wait(5000):
            logger.warning("sensor thread did not stop in time")

    def _cleanup(self) -> None:
        if self._camera:
            self._camera.release()
            self._camera = None
        if self._tracker:
            self._tracker.release()
            self._tracker = None
        self.status_msg.emit("Hand tracking stopped")
