#!/usr/bin/env python3
"""CLI wrapper to score a recorded track against ground-truth.

Example:
  python evaluate.py --pred_dir results/run1 --gt_csv results/synthetic/gt.csv

Expects `predictions.csv` and optional `meta.json` in the prediction directory,
as written by `track.py --save-dir`.
"""
import argparse
import os
import sys

from camshift_tracker import evaluation


def main(argv=None):
    p = argparse.ArgumentParser(description='Score CamShift predictions against ground-truth')
    p.add_argument('--pred_dir', required=True, help='Directory with predictions.csv (and optional meta.json)')
    p.add_argument('--gt_csv', required=True, help='Ground-truth CSV file with columns frame,x,y,w,h')
    p.add_argument('--cle', type=float, default=20.0, help='Center error threshold in pixels')
    args = p.parse_args(argv)

    pred_csv = os.path.join(args.pred_dir, 'predictions.csv')
    try:
        res = evaluation.evaluate(pred_csv, args.gt_csv, cle_threshold=args.cle)
    except (FileNotFoundError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print('\n=== Evaluation Summary ===')
    print(f"Frames evaluated: {res['n_frames']}")
    print(f"Success rate (IoU>0.5): {res['success_rate']*100:.2f}%")
    print(f"Precision (CLE<{args.cle}px): {res['precision']*100:.2f}%")
    print(f"Mean IoU: {res['mean_iou']:.4f}")
    print(f"Mean CLE: {res['mean_cle']:.2f} px")
    if res['fps'] is not None:
        print(f"FPS (from meta.json): {res['fps']:.2f}")
    else:
        print("FPS: meta.json not found")
    return 0


if __name__ == '__main__':
    sys.exit(main())
