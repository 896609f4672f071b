"""
ModeController — decides whether the field should be assembled or exploded
and eases AnimationState.blend toward that target.

Transitions only happen on new gesture samples (or on an explicit toggle);
the blend itself only ever moves by exponential approach.
"""
from __future__ import annotations
import logging

from domain.enums import Gesture, SceneMode
from domain.models import AnimationState, GestureSample
from utils.constants import BLEND_RATE
from utils.geometry import approach_factor, clamp, lerp

logger = logging.getLogger(__name__)


class ModeController:
    """
    Parameters
    ----------
    initial : SceneMode
    rate : float
        k in ``blend ← lerp(blend, target, 1 − exp(−k·dt))``.
    """

    def __init__(
        self,
        initial: SceneMode = SceneMode.ASSEMBLED,
        rate: float = BLEND_RATE,
    ) -> None:
        self._mode = initial
        self._rate = rate
        self._transitions = 0

    # ------------------------------------------------------------------
    def observe(self, sample: GestureSample) -> SceneMode:
        """Apply the transition rule to a freshly published sample."""
        if not sample.hand_detected or sample.gesture is Gesture.NONE:
            return self._mode
        target = SceneMode.ASSEMBLED if sample.is_pinch else SceneMode.EXPLODED
        self._set(target, reason=sample.gesture.value)
        return self._mode

    def toggle(self) -> SceneMode:
        """Manual override: flip the target regardless of the hand."""
        self._set(self._mode.toggled(), reason="toggle")
        return self._mode

    def update(self, state: AnimationState, dt: float) -> float:
        """Advance state.blend by one tick and return it."""
        factor = approach_factor(self._rate, dt)
        state.blend = clamp(lerp(state.blend, self._mode.target_blend, factor))
        return state.blend

    # ------------------------------------------------------------------
    def _set(self, mode: SceneMode, reason: str) -> None:
        if mode is self._mode:
            return
        logger.info("[STATE] %s → %s (%s)", self._mode.value, mode.value, reason)
        self._mode = mode
        self._transitions += 1

    @property
    def mode(self) -> SceneMode:
        return self._mode

    @property
    def target(self) -> float:
        return self._mode.target_blend

    @property
    def transitions(self) -> int:
        """How many times the target has changed since construction."""
        return self._transitions
