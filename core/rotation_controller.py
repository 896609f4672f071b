"""
RotationController — spins the whole field as one rigid body.

An open hand steers: its horizontal pointer position sets the target
angular velocity (centre = stop, edges = full speed either way). Anything
else falls back to a slow idle spin. Velocity is smoothed separately from
the angle integration so crossing the centre line never snaps direction.
"""
from __future__ import annotations

from domain.models import AnimationState, GestureSample
from utils.constants import (
    GESTURE_ROTATION_RATE,
    IDLE_ANGULAR_VELOCITY,
    IDLE_ROTATION_RATE,
    MAX_ANGULAR_VELOCITY,
    POINTER_GAIN,
)
from utils.geometry import clamp, damp


class RotationController:

    def __init__(
        self,
        gesture_rate: float = GESTURE_ROTATION_RATE,
        idle_rate: float = IDLE_ROTATION_RATE,
        idle_velocity: float = IDLE_ANGULAR_VELOCITY,
        max_velocity: float = MAX_ANGULAR_VELOCITY,
    ) -> None:
        self._gesture_rate = gesture_rate
        self._idle_rate = idle_rate
        self._idle_velocity = idle_velocity
        self._max_velocity = max_velocity

    # ------------------------------------------------------------------
    def target_for(self, sample: GestureSample) -> tuple[float, float]:
        """(target angular velocity, smoothing rate) for the given sample."""
        if sample.is_open:
            speed = (sample.pointer[0] - 0.5) * POINTER_GAIN
            speed = clamp(speed, -self._max_velocity, self._max_velocity)
            return speed, self._gesture_rate
        return self._idle_velocity, self._idle_rate

    def update(self, state: AnimationState, sample: GestureSample, dt: float) -> float:
        """Smooth the velocity, integrate the angle, return the new angle."""
        if dt <= 0.0:
            return state.rotation_angle
        target, rate = self.target_for(sample)
        state.angular_velocity = damp(state.angular_velocity, target, rate, dt)
        state.rotation_angle += state.angular_velocity * dt
        return state.rotation_angle
