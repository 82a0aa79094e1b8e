"""
Keypoint ordering and skeleton topology for single-body pose models.
"""

from typing import Dict, List, Sequence, Tuple


# COCO keypoint names (MoveNet and the MediaPipe mapping both use this order)
KEYPOINT_NAMES = [
    'nose', 'left_eye', 'right_eye', 'left_ear', 'right_ear',
    'left_shoulder', 'right_shoulder', 'left_elbow', 'right_elbow',
    'left_wrist', 'right_wrist', 'left_hip', 'right_hip',
    'left_knee', 'right_knee', 'left_ankle', 'right_ankle'
]

NUM_KEYPOINTS = len(KEYPOINT_NAMES)

# Skeleton connections, grouped by body part
JOINT_LINE_GROUPS: Dict[str, Tuple[Tuple[int, int], ...]] = {
    'face': ((0, 2), (2, 4), (0, 1), (1, 3)),
    'body': ((6, 5), (5, 11), (11, 12), (12, 6)),
    'arm': ((6, 8), (8, 10), (5, 7), (7, 9)),
    'leg': ((12, 14), (14, 16), (11, 13), (13, 15)),
}

# Flat list in drawing order: face, body, arm, leg
JOINT_LINE_LIST: Tuple[Tuple[int, int], ...] = (
    JOINT_LINE_GROUPS['face']
    + JOINT_LINE_GROUPS['body']
    + JOINT_LINE_GROUPS['arm']
    + JOINT_LINE_GROUPS['leg']
)


def keypoint_index(name: str) -> int:
    """Return the joint index for a keypoint name."""
    try:
        return KEYPOINT_NAMES.index(name)
    except ValueError:
        raise ValueError(f"Unknown keypoint name: {name}") from None


def denormalize_coords(
    coords: Sequence[Tuple[float, float]],
    image_size: Tuple[int, int]
) -> List[Tuple[float, float]]:
    """
    Denormalize keypoint coordinates from [0, 1] range to pixel coordinates.

    Args:
        coords: Sequence of (x, y) pairs in [0, 1]
        image_size: Image size (height, width)

    Returns:
        List of (x, y) pairs in pixels
    """
    height, width = image_size
    return [(float(x) * width, float(y) * height) for x, y in coords]
