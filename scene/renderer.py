"""
Abstract base class for whatever draws the scene.

The scene controller hands over one FrameTransforms per tick and never
looks at the result; lighting, materials and buffers are the renderer's
business.
"""
from __future__ import annotations
from abc import ABC, abstractmethod

from domain.models import FrameTransforms


class InstanceRenderer(ABC):
    """Consumer of per-instance transforms."""

    @abstractmethod
    def submit(self, frame: FrameTransforms) -> None:
        """
        Receive this tick's transforms.

        Parameters
        ----------
        frame : FrameTransforms
            Reused between ticks; copy anything that must outlive the call.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
