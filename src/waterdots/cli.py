#!/usr/bin/env python3
"""
WaterDots demo

Opens a window whose bottom strip hosts the particle band (mouse wheel scrolls,
mouse motion pushes the dots away), or renders a headless PNG sequence with
``--output-dir``.
"""

import argparse
import sys

import numpy as np
import matplotlib

from . import config


def build_parser():
    parser = argparse.ArgumentParser(description='Bottom-band curl-noise particle animation')
    parser.add_argument('--width', type=int, default=config.VIEWPORT_SIZE[0],
                        help='Viewport width in px')
    parser.add_argument('--height', type=int, default=config.VIEWPORT_SIZE[1],
                        help='Viewport height in px')
    parser.add_argument('--output-dir', default=None,
                        help='Render frames headless into this directory instead of opening a window')
    parser.add_argument('--frames', type=int, default=120,
                        help='Number of frames to export (with --output-dir)')
    parser.add_argument('--seed', type=int, default=None, help='Seed for the particle layout')
    parser.add_argument('--verbose', action='store_true', help='Print lifecycle messages')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error('--width and --height must be positive')
    if args.frames <= 0:
        parser.error('--frames must be positive')

    config.VERBOSE = args.verbose
    if args.output_dir:
        matplotlib.use('Agg')

    # Imported after the backend choice
    from .ui.host import BandHost

    host = BandHost((args.width, args.height), rng=np.random.default_rng(args.seed))
    if not args.output_dir:
        host.show()
        return 0

    try:
        paths = host.export_frames(args.output_dir, num_frames=args.frames)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    finally:
        host.close()

    print(f"\n✓ Saved {len(paths)} frames to {args.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
