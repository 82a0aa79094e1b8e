"""
Real-time pose overlay using webcam or video streams.
"""

import logging
from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np

from .image_processor import EngineProcessFailed, ImageProcessor

logger = logging.getLogger(__name__)


class RealtimePoseDetector:
    """Feeds frames from a camera or video file through an ImageProcessor."""

    def __init__(
        self,
        processor: ImageProcessor,
        camera_id: int = 0,
        resolution: Tuple[int, int] = (640, 480),
        window_name: str = 'Pose Overlay'
    ):
        """
        Initialize real-time pose detector.

        Args:
            processor: Initialized image processor
            camera_id: Camera ID for webcam
            resolution: Video resolution (width, height)
            window_name: Title of the display window
        """
        self.processor = processor
        self.camera_id = camera_id
        self.resolution = resolution
        self.window_name = window_name

        self.cap = None
        self.is_running = False

        # Performance tracking
        self.history_size = 30
        self.pre_process_times: List[float] = []
        self.inference_times: List[float] = []
        self.post_process_times: List[float] = []
        self.current_fps = 0.0

    def start_camera(self) -> bool:
        """Start camera capture."""
        self.cap = cv2.VideoCapture(self.camera_id)
        if not self.cap.isOpened():
            logger.error("Failed to open camera %d", self.camera_id)
            self.cap = None
            return False

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.resolution[0])
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.resolution[1])
        return True

    def stop_camera(self):
        """Stop camera capture."""
        if self.cap:
            self.cap.release()
            self.cap = None

    def run_webcam(self, display: bool = True, output_path: Optional[str] = None):
        """
        Run real-time pose overlay on webcam.

        Args:
            display: Whether to display the video
            output_path: Output path for the annotated video
        """
        if not self.start_camera():
            print("Failed to start camera")
            return

        print("Starting real-time pose overlay. Press 'q' to quit.")
        try:
            self._run_loop(self.cap, display, output_path, fps=30.0)
        finally:
            self.stop_camera()

    def process_video_stream(
        self,
        video_path: str,
        display: bool = True,
        output_path: Optional[str] = None
    ):
        """
        Process video file frame by frame.

        Args:
            video_path: Path to video file
            display: Whether to display the video
            output_path: Output path for the annotated video
        """
        cap = cv2.VideoCapture(video_path)
        if not cap.isOpened():
            print(f"Failed to open video: {video_path}")
            return

        fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        print(f"Processing video: {video_path}")
        print(f"Total frames: {frame_count}, FPS: {fps}")

        try:
            self._run_loop(cap, display, output_path, fps=fps)
        finally:
            cap.release()

    def _run_loop(self, cap, display: bool, output_path: Optional[str], fps: float):
        writer = None
        if output_path:
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            writer = cv2.VideoWriter(output_path, fourcc, fps, self.resolution)

        self.is_running = True
        try:
            while self.is_running:
                ret, frame = cap.read()
                if not ret:
                    break

                frame = cv2.resize(frame, self.resolution)
                self.process_frame(frame)

                if writer:
                    writer.write(frame)

                if display:
                    cv2.imshow(self.window_name, frame)
                    key = cv2.waitKey(1) & 0xFF
                    if key == ord('q'):
                        break

        except KeyboardInterrupt:
            print("Interrupted by user")

        finally:
            self.is_running = False
            if display:
                cv2.destroyAllWindows()
            if writer:
                writer.release()

    def process_frame(self, frame: np.ndarray) -> bool:
        """
        Annotate one frame in place.

        A frame the engine fails on is left as is.

        Returns:
            True if the frame was annotated
        """
        try:
            result = self.processor.process(frame)
        except EngineProcessFailed as e:
            logger.warning("Skipping frame: %s", e)
            return False

        self._update_performance_stats(
            result.time_pre_process, result.time_inference, result.time_post_process
        )
        self.current_fps = result.fps
        return True

    def _update_performance_stats(self, time_pre: float, time_inference: float, time_post: float):
        for times, value in (
            (self.pre_process_times, time_pre),
            (self.inference_times, time_inference),
            (self.post_process_times, time_post),
        ):
            times.append(value)
            # Keep only recent frame times
            if len(times) > self.history_size:
                times.pop(0)

    def get_performance_stats(self) -> Dict[str, float]:
        """Get current performance statistics."""
        if not self.inference_times:
            return {'fps': 0.0}

        return {
            'fps': self.current_fps,
            'avg_pre_process_time': float(np.mean(self.pre_process_times)),
            'avg_inference_time': float(np.mean(self.inference_times)),
            'min_inference_time': float(np.min(self.inference_times)),
            'max_inference_time': float(np.max(self.inference_times)),
            'avg_post_process_time': float(np.mean(self.post_process_times))
        }

    def stop(self):
        """Stop the loop after the current frame."""
        self.is_running = False
