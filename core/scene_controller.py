"""
SceneController — owns the render-side state and runs one tick per frame.

    LatestGestureCell ─▶ ModeController ─┐
                     └▶ RotationController ─▶ ParticleAnimator ─▶ renderer

Every mutation of AnimationState happens inside tick(), on the render
thread. The sensor thread only ever touches the cell.
"""
from __future__ import annotations
import logging
from typing import Optional

from core.gesture_cell import LatestGestureCell
from core.mode_controller import ModeController
from core.rotation_controller import RotationController
from domain.enums import SceneMode
from domain.models import AnimationState, FrameTransforms, GestureSample
from scene.particle_animator import ParticleAnimator
from scene.particle_field import ParticleField
from scene.renderer import InstanceRenderer
from scene.snowfall import Snowfall
from scene.top_star import TopStar

logger = logging.getLogger(__name__)


class SceneController:
    """
    Parameters
    ----------
    field : ParticleField
        Generated once at startup and shared read-only.
    cell : LatestGestureCell
        Latest gesture from the sensor thread.
    mode, rotation : controllers (defaults built from the tuning constants)
    renderer : InstanceRenderer, optional
        Receives the frame at the end of every tick.
    star, snow : optional decorations animated alongside the field.
    """

    def __init__(
        self,
        field: ParticleField,
        cell: Optional[LatestGestureCell] = None,
        mode: Optional[ModeController] = None,
        rotation: Optional[RotationController] = None,
        renderer: Optional[InstanceRenderer] = None,
        star: Optional[TopStar] = None,
        snow: Optional[Snowfall] = None,
        state: Optional[AnimationState] = None,
    ) -> None:
        self._cell = cell or LatestGestureCell()
        self._mode = mode or ModeController()
        self._rotation = rotation or RotationController()
        self._animator = ParticleAnimator(field)
        self._renderer = renderer
        self._star = star
        self._snow = snow

        self.state = state or AnimationState(blend=self._mode.target)
        self._seen_sequence = self._cell.snapshot().sequence
        self._sample: GestureSample = self._cell.latest()

    # ------------------------------------------------------------------
    def tick(self, dt: float) -> FrameTransforms:
        """
        Advance the scene by dt seconds and hand the frame to the renderer.
        Never waits for the sensor; reuses the last sample if nothing new.
        """
        dt = max(float(dt), 0.0)

        published = self._cell.snapshot()
        if published.sequence != self._seen_sequence:
            self._seen_sequence = published.sequence
            self._sample = published.sample
            self._mode.observe(self._sample)

        state = self.state
        state.elapsed += dt
        self._mode.update(state, dt)
        self._rotation.update(state, self._sample, dt)

        frame = self._animator.animate(state.blend, state.elapsed, state.rotation_angle)
        if self._star is not None:
            frame.star = self._star.update(self._mode.mode, state.elapsed, dt)
        if self._snow is not None:
            frame.snow = self._snow.update(state.elapsed)

        if self._renderer is not None:
            self._renderer.submit(frame)
        return frame

    def toggle_mode(self) -> SceneMode:
        """Manual override (e.g. a click). The blend starts moving next tick."""
        return self._mode.toggle()

    def attach_renderer(self, renderer: Optional[InstanceRenderer]) -> None:
        self._renderer = renderer

    def teardown(self) -> None:
        """Stop accepting samples; the scene keeps idling on the last one."""
        self._cell.close()
        self._renderer = None
        logger.info("scene torn down at t=%.2fs", self.state.elapsed)

    # ------------------------------------------------------------------
    @property
    def mode(self) -> SceneMode:
        return self._mode.mode

    @property
    def mode_controller(self) -> ModeController:
        return self._mode

    @property
    def sample(self) -> GestureSample:
        """The gesture sample the last tick ran on."""
        return self._sample
