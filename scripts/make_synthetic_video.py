#!/usr/bin/env python3
"""Write a synthetic test video (solid square moving left to right) and its ground truth.

Output: `<out_dir>/moving_square.avi` and `<out_dir>/gt.csv` with rows `frame,x,y,w,h`
(1-based frames, matching the tracker's predictions.csv).

Usage:
  python scripts/make_synthetic_video.py --out_dir results/synthetic --frames 80
"""
import argparse
import csv
from pathlib import Path

import cv2

from camshift_tracker.synthetic import moving_square_frames, square_box


def main():
    p = argparse.ArgumentParser()
    p.add_argument('--out_dir', default='results/synthetic', help='Output directory')
    p.add_argument('--frames', type=int, default=80, help='Number of frames')
    p.add_argument('--width', type=int, default=320)
    p.add_argument('--height', type=int, default=240)
    p.add_argument('--size', type=int, default=40, help='Square side (px)')
    p.add_argument('--step', type=int, default=4, help='Horizontal motion per frame (px)')
    p.add_argument('--fps', type=float, default=25.0)
    args = p.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    video_path = out_dir / 'moving_square.avi'

    writer = cv2.VideoWriter(str(video_path), cv2.VideoWriter_fourcc(*'MJPG'), args.fps,
                             (args.width, args.height))
    if not writer.isOpened():
        raise RuntimeError(f"Cannot open video writer for {video_path}")
    frames = moving_square_frames(args.frames, args.width, args.height, size=args.size, step=args.step)
    for frame in frames:
        writer.write(frame)
    writer.release()

    with open(out_dir / 'gt.csv', 'w', newline='') as f:
        w = csv.writer(f)
        w.writerow(['frame', 'x', 'y', 'w', 'h'])
        for i in range(args.frames):
            x, y, bw, bh = square_box(i, size=args.size, step=args.step)
            if x >= args.width:
                break
            w.writerow([i + 1, x, y, min(bw, args.width - x), bh])

    print(f"Wrote {args.frames} frames to {video_path}")


if __name__ == '__main__':
    main()
