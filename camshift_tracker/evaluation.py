"""Scoring of recorded tracks against ground truth.

Both files are CSVs with columns `frame,x,y,w,h`: `predictions.csv` as written
by the tracker with `--save-dir`, and a ground-truth file of the same shape
(e.g. the `gt.csv` from `scripts/make_synthetic_video.py`).
"""
import csv
import json
import math
import os
from typing import Dict, Tuple

Box = Tuple[int, int, int, int]


def read_boxes(path: str) -> Dict[int, Box]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"CSV not found: {path}")
    boxes = {}
    with open(path, newline='') as f:
        for row in csv.DictReader(f):
            try:
                boxes[int(row['frame'])] = tuple(int(float(row[k])) for k in ('x', 'y', 'w', 'h'))
            except (KeyError, TypeError, ValueError):
                continue
    return boxes


def iou(box_a: Box, box_b: Box) -> float:
    """Intersection over union of two (x, y, w, h) boxes."""
    ax, ay, aw, ah = box_a
    bx, by, bw, bh = box_b
    inter_w = max(0, min(ax + aw, bx + bw) - max(ax, bx))
    inter_h = max(0, min(ay + ah, by + bh) - max(ay, by))
    inter = inter_w * inter_h
    union = max(0, aw) * max(0, ah) + max(0, bw) * max(0, bh) - inter
    return inter / union if union > 0 else 0.0


def center_error(box_a: Box, box_b: Box) -> float:
    ax, ay, aw, ah = box_a
    bx, by, bw, bh = box_b
    return math.hypot((ax + aw / 2.0) - (bx + bw / 2.0), (ay + ah / 2.0) - (by + bh / 2.0))


def _read_fps(pred_csv: str):
    meta_path = os.path.join(os.path.dirname(pred_csv), 'meta.json')
    if not os.path.exists(meta_path):
        return None
    try:
        with open(meta_path) as f:
            meta = json.load(f)
    except (OSError, ValueError):
        return None
    if meta.get('total_time', 0) > 0 and 'frames' in meta:
        return float(meta['frames']) / float(meta['total_time'])
    return None


def evaluate(pred_csv: str, gt_csv: str, cle_threshold: float = 20.0) -> Dict:
    """Score predictions against ground truth on the frames both files cover.

    Success counts frames with IoU > 0.5, precision frames with a center error
    below `cle_threshold` pixels.
    """
    preds = read_boxes(pred_csv)
    gts = read_boxes(gt_csv)
    frames = sorted(set(preds) & set(gts))
    if not frames:
        raise RuntimeError('No overlapping frames between predictions and ground-truth')

    ious = [iou(preds[f], gts[f]) for f in frames]
    cles = [center_error(preds[f], gts[f]) for f in frames]
    n = len(frames)
    return {
        'n_frames': n,
        'success_rate': sum(1 for v in ious if v > 0.5) / n,
        'precision': sum(1 for v in cles if v < cle_threshold) / n,
        'mean_iou': sum(ious) / n,
        'mean_cle': sum(cles) / n,
        'fps': _read_fps(pred_csv),
    }
