"""
Pose Overlay Package

Real-time single-body pose visualization: runs a pose estimation engine
on a video frame and draws the skeleton and an FPS / inference time
readout onto it.
"""

__version__ = "1.0.0"
__author__ = "Pose Overlay Developers"
