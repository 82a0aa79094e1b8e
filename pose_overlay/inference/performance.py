"""
Frame rate tracking and the FPS / inference time overlay.
"""

import time
from typing import Callable, Optional, Tuple

import numpy as np

from .utils import create_color, draw_text


class FpsTracker:
    """Instantaneous FPS from the time between two consecutive ticks."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        """
        Initialize FPS tracker.

        Args:
            clock: Monotonic clock returning seconds
        """
        self.clock = clock
        self.time_previous: Optional[float] = None

    def tick(self) -> float:
        """
        Record a frame and return the FPS since the previous one.

        Returns 0.0 on the first tick, and when no time has elapsed.
        """
        time_now = self.clock()
        time_previous, self.time_previous = self.time_previous, time_now

        if time_previous is None:
            return 0.0
        elapsed = time_now - time_previous
        if elapsed <= 0:
            return 0.0
        return 1.0 / elapsed

    def reset(self):
        """Forget the previous tick."""
        self.time_previous = None


def format_fps_text(fps: float, time_inference: float) -> str:
    return f"FPS: {fps:.1f}, Inference: {time_inference:.1f} [ms]"


def draw_fps(
    image: np.ndarray,
    time_inference: float,
    fps_tracker: FpsTracker,
    pos: Tuple[int, int] = (0, 0),
    font_scale: float = 0.5,
    thickness: int = 2,
    color_front: Tuple[int, int, int] = create_color(0, 0, 0),
    color_back: Tuple[int, int, int] = create_color(180, 180, 180),
    is_text_on_rect: bool = True
) -> float:
    """
    Draw the FPS and inference time readout.

    Args:
        image: Image to draw on (modified in place)
        time_inference: Inference time of the current frame [msec]
        fps_tracker: Tracker ticked once per call
        pos: Top-left corner of the text
        font_scale: Font scale
        thickness: Text thickness
        color_front: Text color (BGR)
        color_back: Background color (BGR)
        is_text_on_rect: Draw a filled rectangle behind the text

    Returns:
        The FPS value that was drawn
    """
    fps = fps_tracker.tick()
    draw_text(
        image, format_fps_text(fps, time_inference), pos, font_scale, thickness,
        color_front, color_back, is_text_on_rect
    )
    return fps
