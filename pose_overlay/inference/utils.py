"""
Utility functions for drawing pose results.
"""

from typing import Sequence, Tuple

import cv2
import numpy as np

from ..data.utils import JOINT_LINE_LIST
from ..models.base_model import KeypointSet


def create_color(b: int, g: int, r: int) -> Tuple[int, int, int]:
    """Create an OpenCV color (BGR order)."""
    return (int(b), int(g), int(r))


def draw_text(
    image: np.ndarray,
    text: str,
    pos: Tuple[int, int],
    font_scale: float,
    thickness: int,
    color_front: Tuple[int, int, int],
    color_back: Tuple[int, int, int],
    is_text_on_rect: bool = True
) -> None:
    """
    Draw a line of text, anchored at its top-left corner.

    Args:
        image: Image to draw on (modified in place)
        text: Text to draw
        pos: Top-left corner of the text (x, y)
        font_scale: Font scale
        thickness: Text thickness
        color_front: Text color (BGR)
        color_back: Background rectangle or outline color (BGR)
        is_text_on_rect: Draw a filled rectangle behind the text instead of an outline
    """
    (text_width, text_height), baseline = cv2.getTextSize(
        text, cv2.FONT_HERSHEY_SIMPLEX, font_scale, thickness
    )
    baseline += thickness
    x, y = int(pos[0]), int(pos[1]) + text_height

    if is_text_on_rect:
        cv2.rectangle(
            image, (x, y + baseline), (x + text_width, y - text_height), color_back, -1
        )
        cv2.putText(image, text, (x, y), cv2.FONT_HERSHEY_SIMPLEX, font_scale, color_front, thickness)
    else:
        cv2.putText(image, text, (x, y), cv2.FONT_HERSHEY_SIMPLEX, font_scale, color_back, thickness * 3)
        cv2.putText(image, text, (x, y), cv2.FONT_HERSHEY_SIMPLEX, font_scale, color_front, thickness)


def draw_skeleton(
    image: np.ndarray,
    keypoint_set: KeypointSet,
    joint_lines: Sequence[Tuple[int, int]] = JOINT_LINE_LIST,
    score_threshold: float = 0.2,
    point_size: int = 5,
    line_thickness: int = 2,
    point_color: Tuple[int, int, int] = (0, 255, 0),
    line_color: Tuple[int, int, int] = (200, 200, 200)
) -> None:
    """
    Draw skeleton connections and keypoints of one body on an image.

    A connection is drawn only when both of its keypoints reach
    ``score_threshold``. Connections are drawn first so that keypoints
    end up on top of them. Coordinates are used as given; they are not
    clipped to the image.

    Args:
        image: Image to draw on (modified in place)
        keypoint_set: Scores and pixel coordinates of one body
        joint_lines: Skeleton connections as (index, index) pairs
        score_threshold: Minimum score for a keypoint to be drawn
        point_size: Radius of keypoint circles
        line_thickness: Thickness of skeleton lines
        point_color: Color of keypoints (BGR)
        line_color: Color of skeleton lines (BGR)
    """
    scores = keypoint_set.scores
    coords = keypoint_set.coords

    # Draw connections
    for start_idx, end_idx in joint_lines:
        if scores[start_idx] >= score_threshold and scores[end_idx] >= score_threshold:
            start_point = (int(coords[start_idx][0]), int(coords[start_idx][1]))
            end_point = (int(coords[end_idx][0]), int(coords[end_idx][1]))
            cv2.line(image, start_point, end_point, line_color, line_thickness)

    # Draw keypoints
    for score, (x, y) in zip(scores, coords):
        if score >= score_threshold:
            cv2.circle(image, (int(x), int(y)), point_size, point_color, -1)
