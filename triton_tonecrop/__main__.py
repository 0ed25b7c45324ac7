"""
CLI entry point for Triton-Tonecrop.

Usage:
    python -m triton_tonecrop INPUT [INPUT ...] [--output-dir DIR]

Author: yuhezhang-ai
"""

import sys
import argparse
import torch

from . import config
from .batch import Batch, run_batch
from .errors import ImageIOError, DeviceResourceError
from .pipeline import ImagePipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m triton_tonecrop',
        description='Convert RGB PPM images to center-cropped, tone-lifted grayscale PGM images on the GPU.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process two images into ./output
  python -m triton_tonecrop photos/a.ppm photos/b.ppm

  # Names relative to an input directory, custom output directory
  python -m triton_tonecrop a.ppm b.ppm --input-dir photos --output-dir gray

  # Read the batch from a list file (one name per line)
  python -m triton_tonecrop --list-file batch.txt --input-dir photos

Any unreadable input or device failure stops the whole batch.
        """
    )

    parser.add_argument(
        'inputs',
        nargs='*',
        help='Input PPM files, processed in the given order'
    )

    parser.add_argument(
        '--list-file',
        type=str,
        default=None,
        help='Text file with one input name per line (appended after positional inputs)'
    )

    parser.add_argument(
        '--input-dir',
        type=str,
        default=None,
        help='Directory that relative input names are resolved against'
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        default='output',
        help='Directory for output PGM files, created if missing (default: output)'
    )

    parser.add_argument(
        '--suffix',
        type=str,
        default=None,
        help=f'Suffix appended to output names (default: {config.OUTPUT_SUFFIX})'
    )

    parser.add_argument(
        '--device-resident',
        action='store_true',
        help='Keep the grayscale plane on the GPU between stages (skip the host round-trip)'
    )

    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress progress messages'
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        config.set_verbose(False)

    identifiers = list(args.inputs)
    try:
        if args.list_file is not None:
            listed = Batch.from_list_file(args.list_file, args.output_dir)
            identifiers.extend(listed.identifiers)
    except ImageIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not identifiers:
        print("Error: Must provide at least one input image.", file=sys.stderr)
        sys.exit(1)

    # Check CUDA availability
    if not torch.cuda.is_available():
        print("Error: CUDA is not available. Triton-Tonecrop requires a GPU.", file=sys.stderr)
        sys.exit(1)

    batch = Batch(
        identifiers=tuple(identifiers),
        output_dir=args.output_dir,
        input_dir=args.input_dir,
        suffix=args.suffix,
    )
    pipeline = ImagePipeline(host_round_trip=False if args.device_resident else None)

    try:
        written = run_batch(batch, pipeline)
    except (ImageIOError, DeviceResourceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if config.VERBOSE:
        print(f"✓ Processed {len(written)} image(s) into {batch.output_dir}")


if __name__ == '__main__':
    main()
