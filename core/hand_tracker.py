"""
HandTracker — encapsulates all MediaPipe logic.
The rest of the application never imports mediapipe directly.
"""
from __future__ import annotations
from typing import Any, List, Optional

import cv2
import mediapipe as mp

from domain.errors import SensorUnavailableError
from domain.models import Landmark3D


class HandTracker:
    """
    Runs the MediaPipe hand landmark model on BGR frames and returns the
    raw normalised (x, y, z) landmarks of at most one hand.

    Parameters
    ----------
    min_detection_confidence : float
    min_tracking_confidence : float
    draw : bool
        Draw the detected hand onto the frame (preview overlay).

    Raises
    ------
    SensorUnavailableError
        If the model cannot be created.
    """

    def __init__(
        self,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        draw: bool = True,
    ) -> None:
        try:
            self._mp_hands = mp.solutions.hands
            self._mp_draw  = mp.solutions.drawing_utils
            self._hands    = self._mp_hands.Hands(
                static_image_mode=False,
                max_num_hands=1,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except Exception as exc:  # model files missing, unsupported build, ...
            raise SensorUnavailableError(f"Hand landmark model failed to load: {exc}") from exc
        self._draw = draw

    # ------------------------------------------------------------------
    def process(self, frame: Any) -> Optional[List[Landmark3D]]:
        """
        Parameters
        ----------
        frame : np.ndarray
            BGR frame from OpenCV. Landmarks are drawn onto it in place
            when drawing is enabled.

        Returns
        -------
        list of (x, y, z) or None
            The 21 normalised landmarks of the first hand, None if no hand.
        """
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self._hands.process(rgb)

        if not results.multi_hand_landmarks:
            return None

        hand = results.multi_hand_landmarks[0]
        if self._draw:
            self._mp_draw.draw_landmarks(
                frame, hand, self._mp_hands.HAND_CONNECTIONS,
                self._mp_draw.DrawingSpec(color=(180, 105, 255), thickness=2, circle_radius=2),
                self._mp_draw.DrawingSpec(color=(255, 255, 0), thickness=1, circle_radius=2),
            )
        return [(lm.x, lm.y, lm.z) for lm in hand.landmark]

    def release(self) -> None:
        self._hands.close()
