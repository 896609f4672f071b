"""
SceneWindow — ventana principal: dibuja el árbol de partículas con QPainter,
avanza la escena con un QTimer y muestra el HUD (modo, gesto, cursor,
preview de la cámara e indicador de "no disponible").

Un click sobre la escena alterna el modo manualmente; la rueda del ratón
acerca o aleja la cámara (distancia 10–40).
"""
from __future__ import annotations
import math
import time
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np
from PyQt6.QtCore import QPointF, QRectF, Qt, QTimer
from PyQt6.QtGui import QBrush, QColor, QImage, QPainter, QPen, QPixmap, QPolygonF
from PyQt6.QtWidgets import QLabel, QTextEdit, QVBoxLayout, QWidget

from core.scene_controller import SceneController
from domain.enums import ParticleCategory, SceneMode
from domain.models import FrameTransforms, GestureSample
from scene.backdrop import StarShell
from scene.particle_field import ParticleField
from scene.projection import PerspectiveCamera, group_to_world
from scene.renderer import InstanceRenderer
from utils.constants import CAMERA_ZOOM_STEP

_BACKGROUND = QColor("#050103")

# Color "emisivo" que se mezcla con el color propio de cada partícula
_EMISSIVE: Dict[ParticleCategory, Tuple[QColor, float]] = {
    ParticleCategory.LEAF:     (QColor("#FF1493"), 0.2),
    ParticleCategory.ORNAMENT: (QColor("#E6E6FA"), 0.8),
    ParticleCategory.RIBBON:   (QColor("#FFFFFF"), 1.0),
}

_MODE_COLORS = {
    SceneMode.ASSEMBLED: QColor("#FF69B4"),
    SceneMode.EXPLODED:  QColor("#B47CFF"),
}

# Tamaño en pantalla de una partícula de escala 1 a distancia focal 1
_POINT_SIZE = 1.2


def _mix(base: QColor, glow: QColor, amount: float) -> QColor:
    a = min(max(amount * 0.5, 0.0), 1.0)
    return QColor(
        int(base.red()   + (glow.red()   - base.red())   * a),
        int(base.green() + (glow.green() - base.green()) * a),
        int(base.blue()  + (glow.blue()  - base.blue())  * a),
    )


class _ColorGroup:
    """Índices de una categoría que comparten color (para agrupar draw calls)."""

    def __init__(self, color: QColor, indices: np.ndarray) -> None:
        self.color = color
        self.indices = indices


class SceneCanvas(QWidget):
    """Proyecta y dibuja el último FrameTransforms recibido."""

    def __init__(self, field: ParticleField, backdrop: Sequence[StarShell] = (), parent=None) -> None:
        super().__init__(parent)
        self.setMinimumSize(640, 480)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

        self._camera = PerspectiveCamera()
        self._backdrop = list(backdrop)
        # las estrellas no se mueven: se redibujan sólo al cambiar tamaño o zoom
        self._backdrop_cache: Optional[Tuple[Tuple[int, int, float], QPixmap]] = None
        self._frame: Optional[FrameTransforms] = None
        self._world: Dict[ParticleCategory, np.ndarray] = {}
        self._groups: Dict[ParticleCategory, List[_ColorGroup]] = {}

        for particles in field:
            glow, amount = _EMISSIVE[particles.category]
            palette, inverse = np.unique(particles.colors, axis=0, return_inverse=True)
            inverse = np.asarray(inverse).reshape(-1)
            self._groups[particles.category] = [
                _ColorGroup(_mix(QColor(*map(int, rgb)), glow, amount), np.flatnonzero(inverse == k))
                for k, rgb in enumerate(palette)
            ]
            self._world[particles.category] = np.empty((len(particles), 3), dtype=np.float64)

        # HUD
        self.mode: SceneMode = SceneMode.ASSEMBLED
        self.sample: GestureSample = GestureSample.no_hand()
        self.tracking_available: Optional[bool] = None
        self._preview: Optional[QImage] = None

        self.on_click = None

    # ------------------------------------------------------------------
    def show_frame(self, frame: FrameTransforms) -> None:
        self._frame = frame
        self.update()

    def set_preview(self, frame_bgr: np.ndarray) -> None:
        """Frame BGR de la cámara; se muestra en espejo."""
        rgb = cv2.flip(cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB), 1)
        h, w, ch = rgb.shape
        # copy(): QImage no es dueño del buffer numpy
        self._preview = QImage(rgb.data, w, h, ch * w, QImage.Format.Format_RGB888).copy()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton and self.on_click is not None:
            self.on_click()

    def wheelEvent(self, event) -> None:
        notches = event.angleDelta().y() / 120.0
        if notches:
            # rueda hacia adelante = acercar
            self._camera.dolly(CAMERA_ZOOM_STEP ** -notches)
            self.update()

    # ------------------------------------------------------------------
    def paintEvent(self, _) -> None:
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.fillRect(self.rect(), _BACKGROUND)
        if self._backdrop:
            self._draw_backdrop(p)

        frame = self._frame
        if frame is not None:
            if frame.snow is not None:
                self._draw_snow(p, frame)
            for category in ParticleCategory:
                if category in frame.categories:
                    self._draw_category(p, frame, category)
            if frame.star is not None:
                self._draw_star(p, frame)

        self._draw_cursor(p)
        self._draw_hud(p)
        self._draw_preview(p)
        p.end()

    def _draw_backdrop(self, p: QPainter) -> None:
        w, h = self.width(), self.height()
        key = (w, h, round(self._camera.distance, 3))
        if self._backdrop_cache is None or self._backdrop_cache[0] != key:
            self._backdrop_cache = (key, self._render_backdrop(w, h))
        p.drawPixmap(0, 0, self._backdrop_cache[1])

    def _render_backdrop(self, w: int, h: int) -> QPixmap:
        pixmap = QPixmap(w, h)
        pixmap.fill(Qt.GlobalColor.transparent)
        p = QPainter(pixmap)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.setPen(Qt.PenStyle.NoPen)
        for shell in self._backdrop:
            screen, depth, visible = self._camera.project(shell.positions, w, h)
            for i in np.flatnonzero(visible):
                r = max(shell.sizes[i] * 15.0 / depth[i], 0.5)
                p.setBrush(QBrush(QColor(*map(int, shell.colors[i]), 170)))
                p.drawEllipse(QPointF(*screen[i]), r, r)
        p.end()
        return pixmap

    def _draw_category(self, p: QPainter, frame: FrameTransforms, category: ParticleCategory) -> None:
        w, h = self.width(), self.height()
        transforms = frame[category]
        world = group_to_world(
            transforms.positions, frame.group_rotation, frame.group_offset,
            out=self._world[category],
        )
        screen, depth, visible = self._camera.project(world, w, h)
        focal = self._camera.focal_length(h)

        p.setPen(Qt.PenStyle.NoPen)
        for group in self._groups[category]:
            idx = group.indices[visible[group.indices]]
            if not len(idx):
                continue
            # de atrás hacia adelante
            idx = idx[np.argsort(-depth[idx])]
            radii = np.maximum(transforms.scales[idx] * _POINT_SIZE * focal / depth[idx] * 0.5, 0.6)
            p.setBrush(QBrush(group.color))
            for (x, y), r in zip(screen[idx], radii):
                p.drawEllipse(QPointF(x, y), r, r)

    def _draw_snow(self, p: QPainter, frame: FrameTransforms) -> None:
        snow = frame.snow
        screen, depth, visible = self._camera.project(snow.positions, self.width(), self.height())
        p.setPen(Qt.PenStyle.NoPen)
        for i in np.flatnonzero(visible):
            alpha = int(255 * 0.4 * snow.alphas[i])
            if alpha <= 0:
                continue
            r = max(snow.sizes[i] / depth[i] * 0.15, 0.8)
            p.setBrush(QBrush(QColor(255, 255, 255, alpha)))
            p.drawEllipse(QPointF(*screen[i]), r, r)

    def _draw_star(self, p: QPainter, frame: FrameTransforms) -> None:
        star = frame.star
        local = np.asarray([star.position], dtype=np.float64)
        world = group_to_world(local, frame.group_rotation, frame.group_offset)
        screen, depth, visible = self._camera.project(world, self.width(), self.height())
        if not visible[0]:
            return

        cx, cy = screen[0]
        pitch, yaw, roll = star.rotation
        size = 1.5 * self._camera.focal_length(self.height()) / depth[0]
        squash = max(abs(math.cos(yaw)), 0.15)
        points = []
        for i in range(10):
            angle = i * math.pi / 5 + math.pi / 2 + roll
            radius = size if i % 2 == 0 else size * 0.4
            points.append(QPointF(
                cx + math.cos(angle) * radius * squash,
                cy - math.sin(angle) * radius * max(abs(math.cos(pitch)), 0.15),
            ))

        glow = min(star.emissive_intensity / 3.0, 1.0)
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(QColor(255, 105, 180, int(60 * glow))))
        p.drawEllipse(QPointF(cx, cy), size * 1.6, size * 1.6)
        p.setBrush(QBrush(QColor(255, 215, 0)))
        p.drawPolygon(QPolygonF(points))

    def _draw_cursor(self, p: QPainter) -> None:
        if not self.sample.hand_detected:
            return
        x = self.sample.pointer[0] * self.width()
        y = self.sample.pointer[1] * self.height()
        pinched = self.sample.is_pinch
        pen = QPen(QColor("#FF69B4"))
        pen.setWidth(2)
        p.setPen(pen)
        p.setBrush(QBrush(QColor(255, 105, 180, 160 if pinched else 40)))
        r = 8 if pinched else 14
        p.drawEllipse(QPointF(x, y), r, r)

    def _draw_hud(self, p: QPainter) -> None:
        color = _MODE_COLORS[self.mode]
        p.setPen(color)
        p.drawText(QRectF(self.width() - 230, 16, 214, 20),
                   Qt.AlignmentFlag.AlignRight, f"Mode: {self.mode.value}")

        gesture = self.sample.gesture.value if self.sample.hand_detected else "none"
        p.setPen(QColor(255, 255, 255, 130))
        p.drawText(QRectF(self.width() - 230, 38, 214, 20),
                   Qt.AlignmentFlag.AlignRight, f"Gesture: {gesture}")

        p.setPen(QColor(255, 183, 197, 200))
        lines = ["Pinch: assemble", "Open hand: explode", "Move open hand: rotate", "Click: toggle  ·  Wheel: zoom"]
        for i, line in enumerate(lines):
            p.drawText(QPointF(20, 32 + i * 18), line)

    def _draw_preview(self, p: QPainter) -> None:
        w, h = 160, 120
        box = QRectF(self.width() - w - 16, self.height() - h - 16, w, h)
        p.setPen(QPen(QColor(255, 105, 180, 120)))
        p.setBrush(QBrush(QColor(0, 0, 0, 200)))
        p.drawRoundedRect(box, 6, 6)

        if self.tracking_available is False:
            p.setPen(QColor("#ff6b6b"))
            p.drawText(box, Qt.AlignmentFlag.AlignCenter, "Hand tracking\nunavailable")
        elif self._preview is not None:
            p.drawImage(box, self._preview)
        else:
            p.setPen(QColor("#FFB7C5"))
            p.drawText(box, Qt.AlignmentFlag.AlignCenter, "Loading…")


class QtSceneRenderer(InstanceRenderer):
    """Adaptador InstanceRenderer → SceneCanvas."""

    def __init__(self, canvas: SceneCanvas) -> None:
        self._canvas = canvas

    def submit(self, frame: FrameTransforms) -> None:
        self._canvas.show_frame(frame)


class SceneWindow(QWidget):
    """
    Ventana de la escena.

    Parameters
    ----------
    scene : SceneController
    field : ParticleField
        El mismo campo que anima la escena (para colores e índices).
    backdrop : sequence of StarShell
        Estrellas de fondo (estáticas).
    tick_interval_ms : int
    """

    def __init__(
        self,
        scene: SceneController,
        field: ParticleField,
        backdrop: Sequence[StarShell] = (),
        tick_interval_ms: int = 16,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._scene = scene
        self._last_tick: Optional[float] = None

        self.setWindowTitle("Gesture Tree")
        self.resize(1100, 760)
        self.setStyleSheet("""
            QWidget { background-color: #050103; color: #e0e0e0; }
            QTextEdit#log {
                background-color: #0b0508;
                color: #7ec8a0;
                font-size: 11px;
                border: 1px solid #331122;
                border-radius: 4px;
            }
        """)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        self._canvas = SceneCanvas(field, backdrop)
        self._canvas.on_click = self._on_click
        root.addWidget(self._canvas, stretch=1)

        self._log = QTextEdit()
        self._log.setObjectName("log")
        self._log.setReadOnly(True)
        self._log.setMaximumHeight(70)
        root.addWidget(self._log)

        self._fps_label = QLabel("", self._canvas)
        self._fps_label.setStyleSheet("color:#555; background:transparent; font-size:10px;")
        self._fps_label.move(20, 110)

        scene.attach_renderer(QtSceneRenderer(self._canvas))

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(tick_interval_ms)

    # ------------------------------------------------------------------
    def _tick(self) -> None:
        now = time.perf_counter()
        dt = 0.0 if self._last_tick is None else now - self._last_tick
        self._last_tick = now

        self._scene.tick(dt)
        self._canvas.mode = self._scene.mode
        self._canvas.sample = self._scene.sample
        if dt > 0:
            self._fps_label.setText(f"{1.0 / dt:.0f} fps")
            self._fps_label.adjustSize()

    def _on_click(self) -> None:
        mode = self._scene.toggle_mode()
        self.on_status(f"[STATE] manual toggle → {mode.value}")

    # ------------------------------------------------------------------
    # Slots llamados desde SensorWorker via señales
    # ------------------------------------------------------------------
    def on_frame(self, frame: np.ndarray) -> None:
        self._canvas.set_preview(frame)

    def on_availability(self, available: bool) -> None:
        self._canvas.tracking_available = available
        self._canvas.update()

    def on_status(self, msg: str) -> None:
        if msg.startswith("[STATE]"):
            self._log.append(f"<span style='color:#6699cc'>{msg}</span>")
        elif msg.startswith("[ERROR]"):
            self._log.append(f"<span style='color:#ff6b6b'>{msg}</span>")
        elif msg.startswith("[WARN]"):
            self._log.append(f"<span style='color:#d0a040'>{msg}</span>")
        else:
            self._log.append(f"<span style='color:#555'>{msg}</span>")
        sb = self._log.verticalScrollBar()
        sb.setValue(sb.maximum())

    def stop(self) -> None:
        self._timer.stop()
