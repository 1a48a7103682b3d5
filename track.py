#!/usr/bin/env python3
"""Track a hand-picked region of a camera or video feed with CamShift.

Usage:
  python track.py                  # default camera
  python track.py test.mov --save-dir results/run1

Keys: i - select region (click its 4 corners), s - save frame, q - quit
"""
import argparse
import sys

from camshift_tracker import ClassicalTracker, FrameSource, FrameSourceError, OpenCVDisplay, TrackerConfig


def build_parser():
    p = argparse.ArgumentParser(description='CamShift hue tracking on a camera or video feed')
    p.add_argument('video', nargs='?', default=None, help='Video file; omit to open the default camera')
    p.add_argument('--save-dir', default=None, help='Write predictions.csv, meta.json and saved frames here')
    p.add_argument('--show-backprojection', action='store_true', help='Also show the back-projection map')
    p.add_argument('--bins', type=int, default=16, help='Hue histogram bins')
    p.add_argument('--max-iter', type=int, default=10, help='CamShift iteration limit')
    p.add_argument('--epsilon', type=float, default=1.0, help='CamShift minimum centroid shift (px)')
    return p


def config_from_args(args):
    return TrackerConfig(
        hist_bins=args.bins,
        max_iter=args.max_iter,
        epsilon=args.epsilon,
        show_backprojection=args.show_backprojection,
        output_dir=args.save_dir,
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    source = FrameSource(0 if args.video is None else args.video)
    try:
        source.open()
    except FrameSourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    tracker = ClassicalTracker(source, OpenCVDisplay(config.window_name), config)
    tracker.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
