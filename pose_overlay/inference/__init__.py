"""
Pose overlay pipeline: drawing, FPS tracking and the engine facade.
"""

from .image_processor import (
    ImageProcessor, ImageProcessorConfig, ProcessResult, load_config,
    ImageProcessorError, AlreadyInitialized, NotInitialized,
    EngineInitFailed, EngineProcessFailed, EngineFinalizeFailed, UnsupportedCommand
)
from .performance import FpsTracker, draw_fps
from .realtime_detector import RealtimePoseDetector
from .utils import create_color, draw_skeleton, draw_text

__all__ = [
    'ImageProcessor', 'ImageProcessorConfig', 'ProcessResult', 'load_config',
    'ImageProcessorError', 'AlreadyInitialized', 'NotInitialized',
    'EngineInitFailed', 'EngineProcessFailed', 'EngineFinalizeFailed', 'UnsupportedCommand',
    'FpsTracker', 'draw_fps', 'RealtimePoseDetector',
    'create_color', 'draw_skeleton', 'draw_text'
]
