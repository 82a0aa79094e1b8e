"""
Script to download a MoveNet ONNX model into a work directory.
"""

import argparse
import hashlib
import sys
import urllib.request
from pathlib import Path


def download_file(url, filename, expected_hash=None):
    """Download a file with optional MD5 verification."""
    print(f"Downloading {filename}...")

    try:
        urllib.request.urlretrieve(url, filename)
    except OSError as e:
        print(f"Failed to download {filename}: {e}")
        return False

    if expected_hash:
        with open(filename, 'rb') as f:
            file_hash = hashlib.md5(f.read()).hexdigest()

        if file_hash != expected_hash:
            print(f"Hash mismatch for {filename}")
            print(f"Expected: {expected_hash}")
            print(f"Got: {file_hash}")
            return False
        print(f"Hash verification passed for {filename}")

    print(f"Downloaded {filename} successfully")
    return True


def main():
    """Main function to download model weights."""
    parser = argparse.ArgumentParser(description='Download MoveNet ONNX Model')
    parser.add_argument('--url', type=str, required=True,
                       help='URL of the MoveNet SinglePose ONNX file')
    parser.add_argument('--work_dir', type=str, default='.',
                       help='Work directory; the model is saved to <work_dir>/model/')
    parser.add_argument('--filename', type=str, default='movenet_singlepose_lightning.onnx',
                       help='File name to save the model as')
    parser.add_argument('--md5', type=str, default=None,
                       help='Expected MD5 of the file')

    args = parser.parse_args()

    output_dir = Path(args.work_dir) / 'model'
    output_dir.mkdir(parents=True, exist_ok=True)

    ok = download_file(args.url, str(output_dir / args.filename), args.md5)
    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
