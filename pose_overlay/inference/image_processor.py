"""
Image processor: runs a pose engine on a frame and draws the result onto it.
"""

import json
import logging
from dataclasses import dataclass, fields
from typing import Callable, Optional, Tuple

import numpy as np

from .performance import FpsTracker, draw_fps
from .utils import create_color, draw_skeleton
from ..models import BasePoseEngine, EngineError, create_engine

logger = logging.getLogger(__name__)


class ImageProcessorError(Exception):
    """Base class for image processor errors."""


class AlreadyInitialized(ImageProcessorError):
    pass


class NotInitialized(ImageProcessorError):
    pass


class EngineInitFailed(ImageProcessorError):
    pass


class EngineProcessFailed(ImageProcessorError):
    pass


class EngineFinalizeFailed(ImageProcessorError):
    pass


class UnsupportedCommand(ImageProcessorError):
    pass


@dataclass
class ImageProcessorConfig:
    """Configuration for the image processor."""
    work_dir: str = '.'
    num_threads: int = 4
    engine: str = 'movenet'  # 'movenet', 'mediapipe'

    # Skeleton
    score_threshold: float = 0.2
    point_size: int = 5
    line_thickness: int = 2
    point_color: Tuple[int, int, int] = create_color(0, 255, 0)
    line_color: Tuple[int, int, int] = create_color(200, 200, 200)

    # FPS readout
    fps_pos: Tuple[int, int] = (0, 0)
    fps_font_scale: float = 0.5
    fps_thickness: int = 2
    fps_color_front: Tuple[int, int, int] = create_color(0, 0, 0)
    fps_color_back: Tuple[int, int, int] = create_color(180, 180, 180)


def load_config(config_path: str) -> ImageProcessorConfig:
    """
    Load image processor configuration from a JSON file.

    Args:
        config_path: Path to a JSON object whose keys are ImageProcessorConfig fields

    Returns:
        Configuration with defaults for missing keys
    """
    with open(config_path, 'r') as f:
        data = json.load(f)

    known = {f.name for f in fields(ImageProcessorConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {sorted(unknown)}")

    # JSON has no tuples
    for key, value in data.items():
        if isinstance(value, list):
            data[key] = tuple(value)

    return ImageProcessorConfig(**data)


@dataclass
class ProcessResult:
    """Annotated frame and the timings of one processed frame."""
    image: np.ndarray
    time_pre_process: float  # [msec]
    time_inference: float  # [msec]
    time_post_process: float  # [msec]
    fps: float


class ImageProcessor:
    """Owns one pose engine and draws its results onto frames."""

    def __init__(
        self,
        engine_factory: Callable[[str], BasePoseEngine] = create_engine,
        fps_tracker: Optional[FpsTracker] = None
    ):
        """
        Initialize image processor.

        Args:
            engine_factory: Creates an engine from ``ImageProcessorConfig.engine``
            fps_tracker: Tracker for the FPS readout (a new one if None)
        """
        self.engine_factory = engine_factory
        self.fps_tracker = fps_tracker if fps_tracker is not None else FpsTracker()
        self.engine: Optional[BasePoseEngine] = None
        self.config = ImageProcessorConfig()

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def initialize(self, config: ImageProcessorConfig):
        if self.engine is not None:
            logger.error("Already initialized")
            raise AlreadyInitialized("Already initialized")

        try:
            engine = self.engine_factory(config.engine)
            engine.initialize(config.work_dir, config.num_threads)
        except (EngineError, ValueError) as e:
            logger.error("Engine initialization failed: %s", e)
            raise EngineInitFailed(str(e)) from e

        self.engine = engine
        self.config = config
        self.fps_tracker.reset()
        logger.info("Initialized %s engine (work_dir=%s)", config.engine, config.work_dir)

    def finalize(self):
        if self.engine is None:
            logger.error("Not initialized")
            raise NotInitialized("Not initialized")

        engine, self.engine = self.engine, None
        try:
            engine.finalize()
        except EngineError as e:
            logger.error("Engine finalization failed: %s", e)
            raise EngineFinalizeFailed(str(e)) from e

    def command(self, cmd: int):
        if self.engine is None:
            logger.error("Not initialized")
            raise NotInitialized("Not initialized")

        # No command is supported yet
        logger.error("command(%d) is not supported", cmd)
        raise UnsupportedCommand(f"command({cmd}) is not supported")

    def process(self, image: np.ndarray) -> ProcessResult:
        """
        Run the engine on a frame and draw the skeleton and FPS readout onto it.

        Only the first detected body is drawn.

        Args:
            image: BGR frame, modified in place

        Returns:
            The annotated frame with pre-process, inference and post-process times
        """
        if self.engine is None:
            logger.error("Not initialized")
            raise NotInitialized("Not initialized")

        try:
            pose_result = self.engine.process(image)
        except EngineError as e:
            logger.error("Engine process failed: %s", e)
            raise EngineProcessFailed(str(e)) from e

        config = self.config
        if pose_result.bodies:
            draw_skeleton(
                image,
                pose_result.bodies[0],
                score_threshold=config.score_threshold,
                point_size=config.point_size,
                line_thickness=config.line_thickness,
                point_color=config.point_color,
                line_color=config.line_color
            )

        fps = draw_fps(
            image,
            pose_result.time_inference,
            self.fps_tracker,
            pos=config.fps_pos,
            font_scale=config.fps_font_scale,
            thickness=config.fps_thickness,
            color_front=config.fps_color_front,
            color_back=config.fps_color_back
        )

        return ProcessResult(
            image=image,
            time_pre_process=pose_result.time_pre_process,
            time_inference=pose_result.time_inference,
            time_post_process=pose_result.time_post_process,
            fps=fps
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self.engine is not None:
            self.finalize()
