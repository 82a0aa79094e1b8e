"""
Pose overlay demo for single images and image directories.
"""

import argparse
import glob
import logging
import os
import sys
from pathlib import Path

import cv2

# Add package root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from pose_overlay.inference import (
    EngineProcessFailed, ImageProcessor, ImageProcessorConfig, ImageProcessorError, load_config
)
from pose_overlay.models import ENGINE_REGISTRY


def main():
    """Main function for image pose overlay demo."""
    parser = argparse.ArgumentParser(description='Image Pose Overlay Demo')
    parser.add_argument('--config', type=str, default=None,
                       help='JSON config file')
    parser.add_argument('--engine', type=str, default=None,
                       choices=sorted(ENGINE_REGISTRY),
                       help='Pose engine to use')
    parser.add_argument('--work_dir', type=str, default=None,
                       help='Working directory containing model/')
    parser.add_argument('--input', type=str, required=True,
                       help='Input image path or directory')
    parser.add_argument('--output', type=str, default='output',
                       help='Output directory')

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(name)s:%(message)s')

    config = load_config(args.config) if args.config else ImageProcessorConfig()
    if args.engine is not None:
        config.engine = args.engine
    if args.work_dir is not None:
        config.work_dir = args.work_dir

    Path(args.output).mkdir(parents=True, exist_ok=True)

    if os.path.isdir(args.input):
        image_paths = sorted(
            glob.glob(os.path.join(args.input, '*.jpg'))
            + glob.glob(os.path.join(args.input, '*.png'))
        )
    else:
        image_paths = [args.input]

    print("Image Pose Overlay Demo")
    print("=" * 40)
    print(f"Engine: {config.engine}")
    print(f"Images: {len(image_paths)}")
    print(f"Output: {args.output}")
    print("=" * 40)

    processor = ImageProcessor()
    try:
        processor.initialize(config)
    except ImageProcessorError as e:
        print(f"Failed to initialize: {e}")
        return 1

    with processor:
        for image_path in image_paths:
            process_single_image(processor, image_path, args.output)
    return 0


def process_single_image(processor, input_path, output_dir):
    """Annotate a single image and write it to the output directory."""
    image = cv2.imread(input_path)
    if image is None:
        print(f"Could not load image: {input_path}")
        return

    try:
        result = processor.process(image)
    except EngineProcessFailed as e:
        print(f"Failed on {input_path}: {e}")
        return

    output_path = os.path.join(output_dir, f"{Path(input_path).stem}_vis.jpg")
    cv2.imwrite(output_path, result.image)

    print(f"{input_path}:")
    print(f"  Pre-process: {result.time_pre_process:.1f} ms")
    print(f"  Inference: {result.time_inference:.1f} ms")
    print(f"  Post-process: {result.time_post_process:.1f} ms")
    print(f"  Saved: {output_path}")


if __name__ == '__main__':
    sys.exit(main())
