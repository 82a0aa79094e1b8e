"""
Real-time pose overlay demo using webcam or a video file.
"""

import argparse
import logging
import os
import sys

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from pose_overlay.inference import (
    ImageProcessor, ImageProcessorConfig, ImageProcessorError,
    RealtimePoseDetector, load_config
)
from pose_overlay.models import ENGINE_REGISTRY


def main():
    """Main function for real-time pose overlay demo."""
    parser = argparse.ArgumentParser(description='Real-time Pose Overlay Demo')
    parser.add_argument('--config', type=str, default=None,
                       help='JSON config file (command-line options override it)')
    parser.add_argument('--engine', type=str, default=None,
                       choices=sorted(ENGINE_REGISTRY),
                       help='Pose engine to use')
    parser.add_argument('--work_dir', type=str, default=None,
                       help='Working directory containing model/')
    parser.add_argument('--num_threads', type=int, default=None,
                       help='Number of inference threads')
    parser.add_argument('--camera', type=int, default=0,
                       help='Camera ID')
    parser.add_argument('--resolution', type=int, nargs=2, default=[640, 480],
                       help='Video resolution (width height)')
    parser.add_argument('--video', type=str, default=None,
                       help='Process video file instead of webcam')
    parser.add_argument('--output', type=str, default=None,
                       help='Output video path')
    parser.add_argument('--no-display', action='store_true',
                       help='Disable video display')
    parser.add_argument('--verbose', action='store_true',
                       help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s:%(name)s:%(message)s'
    )

    config = load_config(args.config) if args.config else ImageProcessorConfig()
    if args.engine is not None:
        config.engine = args.engine
    if args.work_dir is not None:
        config.work_dir = args.work_dir
    if args.num_threads is not None:
        config.num_threads = args.num_threads

    print("Real-time Pose Overlay Demo")
    print("=" * 40)
    print(f"Engine: {config.engine}")
    print(f"Work dir: {config.work_dir}")
    print(f"Resolution: {args.resolution[0]}x{args.resolution[1]}")
    print("Press 'q' to quit")
    print("=" * 40)

    processor = ImageProcessor()
    try:
        processor.initialize(config)
    except ImageProcessorError as e:
        print(f"Failed to initialize: {e}")
        return 1

    with processor:
        detector = RealtimePoseDetector(
            processor,
            camera_id=args.camera,
            resolution=tuple(args.resolution)
        )

        if args.video:
            detector.process_video_stream(
                args.video,
                display=not args.no_display,
                output_path=args.output
            )
        else:
            detector.run_webcam(
                display=not args.no_display,
                output_path=args.output
            )

        stats = detector.get_performance_stats()

    print("\nPerformance")
    print("=" * 40)
    for key, value in stats.items():
        print(f"  {key}: {value:.2f}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
