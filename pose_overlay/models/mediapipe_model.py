"""
MediaPipe-based pose estimation engine.
"""

import logging
import time

import cv2
import numpy as np

from .base_model import BasePoseEngine, EngineError, KeypointSet, PoseEngineResult
from ..data.utils import NUM_KEYPOINTS, denormalize_coords, keypoint_index

try:
    import mediapipe as mp
    MEDIAPIPE_AVAILABLE = True
except ImportError:
    MEDIAPIPE_AVAILABLE = False

logger = logging.getLogger(__name__)

# MediaPipe landmark index for each COCO keypoint
MEDIAPIPE_TO_COCO = {
    'nose': 0,
    'left_eye': 2,
    'right_eye': 5,
    'left_ear': 7,
    'right_ear': 8,
    'left_shoulder': 11,
    'right_shoulder': 12,
    'left_elbow': 13,
    'right_elbow': 14,
    'left_wrist': 15,
    'right_wrist': 16,
    'left_hip': 23,
    'right_hip': 24,
    'left_knee': 25,
    'right_knee': 26,
    'left_ankle': 27,
    'right_ankle': 28,
}

# Same mapping as a list indexed by COCO joint index
MEDIAPIPE_LANDMARK_INDICES = [0] * NUM_KEYPOINTS
for _name, _landmark_idx in MEDIAPIPE_TO_COCO.items():
    MEDIAPIPE_LANDMARK_INDICES[keypoint_index(_name)] = _landmark_idx


class MediaPipePoseEngine(BasePoseEngine):
    """
    MediaPipe Pose engine producing the 17 COCO keypoints.

    MediaPipe bundles its own model, so ``work_dir`` and ``num_threads``
    are accepted for the common contract but not used. Landmark
    ``visibility`` is used as the keypoint score.
    """

    def __init__(
        self,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5
    ):
        """
        Initialize MediaPipe pose engine.

        Args:
            model_complexity: Model complexity (0, 1, or 2)
            min_detection_confidence: Minimum detection confidence
            min_tracking_confidence: Minimum tracking confidence
        """
        self.model_complexity = model_complexity
        self.min_detection_confidence = min_detection_confidence
        self.min_tracking_confidence = min_tracking_confidence
        self.pose = None

    def initialize(self, work_dir: str, num_threads: int) -> None:
        if not MEDIAPIPE_AVAILABLE:
            raise EngineError("mediapipe is not installed")
        if not hasattr(mp, 'solutions'):
            raise EngineError("This mediapipe release does not provide mp.solutions.pose")

        logger.debug("MediaPipe ignores work_dir=%s and num_threads=%d", work_dir, num_threads)
        try:
            self.pose = mp.solutions.pose.Pose(
                static_image_mode=False,
                model_complexity=self.model_complexity,
                smooth_landmarks=False,
                enable_segmentation=False,
                min_detection_confidence=self.min_detection_confidence,
                min_tracking_confidence=self.min_tracking_confidence
            )
        except Exception as e:
            raise EngineError(f"Failed to create MediaPipe Pose: {e}") from e

    def process(self, image: np.ndarray) -> PoseEngineResult:
        if self.pose is None:
            raise EngineError("Engine is not initialized")

        time_pre_start = time.perf_counter()
        image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        time_pre_end = time.perf_counter()

        try:
            results = self.pose.process(image_rgb)
        except Exception as e:
            raise EngineError(f"Inference failed: {e}") from e
        time_infer_end = time.perf_counter()

        result = PoseEngineResult()
        if results.pose_landmarks:
            landmarks = results.pose_landmarks.landmark
            picked = [landmarks[i] for i in MEDIAPIPE_LANDMARK_INDICES]
            scores = [float(lm.visibility) for lm in picked]
            coords = denormalize_coords([(lm.x, lm.y) for lm in picked], image.shape[:2])
            result.bodies.append(KeypointSet(scores=scores, coords=coords))
            result.pose_scores.append(float(np.mean(scores)))
        time_post_end = time.perf_counter()

        result.time_pre_process = (time_pre_end - time_pre_start) * 1000.0
        result.time_inference = (time_infer_end - time_pre_end) * 1000.0
        result.time_post_process = (time_post_end - time_infer_end) * 1000.0
        return result

    def finalize(self) -> None:
        if self.pose is not None:
            self.pose.close()
            self.pose = None
