"""
Base engine class and result contract for pose estimation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np


class EngineError(Exception):
    """Raised by an engine when it cannot initialize, process or finalize."""


@dataclass
class KeypointSet:
    """Keypoints of a single detected body."""
    scores: List[float]
    coords: List[Tuple[float, float]]  # [part][x, y]

    def __post_init__(self):
        if len(self.scores) != len(self.coords):
            raise ValueError(
                f"scores and coords must have the same length "
                f"({len(self.scores)} != {len(self.coords)})"
            )

    def __len__(self) -> int:
        return len(self.scores)


@dataclass
class PoseEngineResult:
    """Output of one engine call for one frame."""
    bodies: List[KeypointSet] = field(default_factory=list)
    pose_scores: List[float] = field(default_factory=list)  # [body]
    time_pre_process: float = 0.0  # [msec]
    time_inference: float = 0.0  # [msec]
    time_post_process: float = 0.0  # [msec]


class BasePoseEngine(ABC):
    """Base class for all pose estimation engines."""

    @abstractmethod
    def initialize(self, work_dir: str, num_threads: int) -> None:
        """
        Load the model and prepare the engine.

        Args:
            work_dir: Working directory containing a ``model`` subdirectory
            num_threads: Number of threads used for inference

        Raises:
            EngineError: If the model cannot be loaded
        """
        pass

    @abstractmethod
    def process(self, image: np.ndarray) -> PoseEngineResult:
        """
        Run pose estimation on one frame.

        Args:
            image: Input image [H, W, C] in BGR order

        Returns:
            Keypoints per body and stage timings

        Raises:
            EngineError: If inference fails
        """
        pass

    @abstractmethod
    def finalize(self) -> None:
        """Release the model and all resources held by the engine."""
        pass
