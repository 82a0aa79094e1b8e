"""
MoveNet SinglePose engine running an ONNX export with onnxruntime.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from .base_model import BasePoseEngine, EngineError, KeypointSet, PoseEngineResult
from ..data.utils import NUM_KEYPOINTS

try:
    import onnxruntime as ort
    ONNX_AVAILABLE = True
except ImportError:
    ONNX_AVAILABLE = False

logger = logging.getLogger(__name__)

MODEL_FILENAME = 'movenet_singlepose_lightning.onnx'
DEFAULT_INPUT_SIZE = 192

# onnxruntime input type string -> numpy dtype
ORT_INPUT_DTYPES = {
    'tensor(uint8)': np.uint8,
    'tensor(int32)': np.int32,
    'tensor(float)': np.float32,
}


def input_dtype_from_ort_type(ort_type: str):
    """Map an onnxruntime input type string to the numpy dtype to feed it."""
    try:
        return ORT_INPUT_DTYPES[ort_type]
    except KeyError:
        raise EngineError(f"Unsupported model input type: {ort_type}") from None


class MoveNetEngine(BasePoseEngine):
    """MoveNet SinglePose (Lightning / Thunder) engine."""

    def __init__(self, model_filename: str = MODEL_FILENAME):
        """
        Initialize MoveNet engine.

        Args:
            model_filename: Model file name inside ``<work_dir>/model``
        """
        self.model_filename = model_filename
        self.session = None
        self.input_name: Optional[str] = None
        self.input_size = DEFAULT_INPUT_SIZE
        self.input_dtype = np.int32

    def initialize(self, work_dir: str, num_threads: int) -> None:
        if not ONNX_AVAILABLE:
            raise EngineError("onnxruntime is not installed")

        model_path = Path(work_dir) / 'model' / self.model_filename
        if not model_path.exists():
            raise EngineError(f"Model file not found: {model_path}")

        session_options = ort.SessionOptions()
        session_options.intra_op_num_threads = num_threads
        session_options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL

        try:
            session = ort.InferenceSession(
                str(model_path), sess_options=session_options, providers=['CPUExecutionProvider']
            )
        except Exception as e:
            raise EngineError(f"Failed to load model {model_path}: {e}") from e

        input_info = session.get_inputs()[0]
        self.input_dtype = input_dtype_from_ort_type(input_info.type)
        self.input_name = input_info.name
        # [1, H, W, 3]; dynamic dims come back as strings
        if isinstance(input_info.shape[1], int):
            self.input_size = input_info.shape[1]
        self.session = session

        logger.info(
            "Loaded %s (input %dx%d, %d threads)",
            model_path, self.input_size, self.input_size, num_threads
        )

    def process(self, image: np.ndarray) -> PoseEngineResult:
        if self.session is None:
            raise EngineError("Engine is not initialized")

        image_height, image_width = image.shape[:2]

        # Pre-process: pad bottom/right to a square, then resize to the model input
        time_pre_start = time.perf_counter()
        square_size = max(image_height, image_width)
        padded = cv2.copyMakeBorder(
            image, 0, square_size - image_height, 0, square_size - image_width,
            cv2.BORDER_CONSTANT, value=(0, 0, 0)
        )
        input_image = cv2.resize(padded, (self.input_size, self.input_size))
        input_image = cv2.cvtColor(input_image, cv2.COLOR_BGR2RGB)
        input_tensor = input_image[np.newaxis].astype(self.input_dtype)
        time_pre_end = time.perf_counter()

        # Inference
        try:
            outputs = self.session.run(None, {self.input_name: input_tensor})
        except Exception as e:
            raise EngineError(f"Inference failed: {e}") from e
        time_infer_end = time.perf_counter()

        # Post-process: [1, 1, 17, (y, x, score)] in padded-square coordinates
        keypoints = np.asarray(outputs[0]).reshape(-1, 3)
        if keypoints.shape[0] != NUM_KEYPOINTS:
            raise EngineError(f"Unexpected output shape: {np.asarray(outputs[0]).shape}")

        scores = [float(s) for s in keypoints[:, 2]]
        coords = [
            (float(x) * square_size, float(y) * square_size)
            for y, x in keypoints[:, :2]
        ]
        time_post_end = time.perf_counter()

        return PoseEngineResult(
            bodies=[KeypointSet(scores=scores, coords=coords)],
            pose_scores=[float(np.mean(scores))],
            time_pre_process=(time_pre_end - time_pre_start) * 1000.0,
            time_inference=(time_infer_end - time_pre_end) * 1000.0,
            time_post_process=(time_post_end - time_infer_end) * 1000.0
        )

    def finalize(self) -> None:
        self.session = None
        self.input_name = None
