"""
Pose estimation engines.

This module contains the engine contract and its implementations:
- MoveNet SinglePose through onnxruntime
- MediaPipe Pose mapped to the COCO keypoint order
"""

from .base_model import BasePoseEngine, EngineError, KeypointSet, PoseEngineResult
from .mediapipe_model import MediaPipePoseEngine
from .movenet_model import MoveNetEngine

ENGINE_REGISTRY = {
    'movenet': MoveNetEngine,
    'mediapipe': MediaPipePoseEngine,
}


def create_engine(engine_type: str) -> BasePoseEngine:
    """Create an engine by name."""
    try:
        engine_class = ENGINE_REGISTRY[engine_type.lower()]
    except KeyError:
        raise ValueError(f"Unsupported engine type: {engine_type}") from None
    return engine_class()


__all__ = [
    'BasePoseEngine', 'EngineError', 'KeypointSet', 'PoseEngineResult',
    'MediaPipePoseEngine', 'MoveNetEngine', 'ENGINE_REGISTRY', 'create_engine'
]
