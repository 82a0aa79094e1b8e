"""
Keypoint tables and skeleton topology.
"""

from .utils import (
    KEYPOINT_NAMES, NUM_KEYPOINTS, JOINT_LINE_GROUPS, JOINT_LINE_LIST,
    keypoint_index, denormalize_coords
)

__all__ = [
    'KEYPOINT_NAMES', 'NUM_KEYPOINTS', 'JOINT_LINE_GROUPS', 'JOINT_LINE_LIST',
    'keypoint_index', 'denormalize_coords'
]
