"""
Utility functions for tracking
"""
import csv
import json
import os
from enum import Enum

import cv2
import numpy as np


class SelectorState(Enum):
    IDLE = 'idle'
    SELECTING = 'selecting'


def derive_roi_box(points):
    """
    Axis-aligned box from the clicked points

    Top-left is the point with the smallest x + y, bottom-right the one with the
    largest (first one wins on ties). Only correct when the clicks outline an
    unrotated rectangle; other quadrilaterals give a wrong box.

    Returns:
        (x, y, w, h), or None when the box has no area
    """
    if not points:
        return None
    top_left = min(points, key=lambda p: p[0] + p[1])
    bottom_right = max(points, key=lambda p: p[0] + p[1])

    x = min(top_left[0], bottom_right[0])
    y = min(top_left[1], bottom_right[1])
    w = abs(bottom_right[0] - top_left[0])
    h = abs(bottom_right[1] - top_left[1])
    if w <= 0 or h <= 0:
        return None
    return (int(x), int(y), int(w), int(h))


class ROISelector:
    """Four-click ROI selector, fed with click events by the main loop"""

    max_points = 4

    def __init__(self):
        self.state = SelectorState.IDLE
        self.points = []
        self.box = None

    @property
    def selecting(self):
        return self.state is SelectorState.SELECTING

    def begin(self):
        self.state = SelectorState.SELECTING
        self.points = []
        self.box = None

    def cancel(self):
        self.state = SelectorState.IDLE
        self.points = []

    def add_point(self, x, y):
        """
        Record a click. Returns True if the point was accepted.

        The 4th point closes the selection: a valid box sends the selector back
        to IDLE, a degenerate one clears the points so the user can click again.
        """
        if not self.selecting or len(self.points) >= self.max_points:
            return False
        self.points.append((int(x), int(y)))

        if len(self.points) == self.max_points:
            box = derive_roi_box(self.points)
            if box is None:
                print(f"Degenerate ROI from points {self.points}, click 4 corners again")
                self.points = []
            else:
                self.box = box
                self.points = []
                self.state = SelectorState.IDLE
        return True


def draw_selection_marker(frame, point, radius=4, color=(0, 255, 0), thickness=2):
    cv2.circle(frame, (int(point[0]), int(point[1])), radius, color, thickness)
    return frame


def visualize_tracking(frame, region, color=(0, 255, 0), thickness=2):
    """
    Draw the oriented box of the tracked region onto the frame (in place)
    Showing the frame is left to the display
    """
    pts = np.int32(np.round(region.points()))
    cv2.polylines(frame, [pts], True, color, thickness)
    return frame


def save_frame(frame, frame_number, output_dir='results/frames'):
    """Save a frame to file, OSError if it cannot be written"""
    os.makedirs(output_dir, exist_ok=True)
    filename = f"{output_dir}/Frame_{frame_number:04d}.png"
    if not cv2.imwrite(filename, frame):
        raise OSError(f"Could not write {filename}")
    return filename


def save_prediction(output_dir, frame_number, window):
    """Append one `frame,x,y,w,h` row to predictions.csv, header on first write"""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, 'predictions.csv')
    new_file = not os.path.exists(path)
    x, y, w, h = window
    with open(path, 'a', newline='') as f:
        writer = csv.writer(f)
        if new_file:
            writer.writerow(['frame', 'x', 'y', 'w', 'h'])
        writer.writerow([int(frame_number), int(x), int(y), int(w), int(h)])
    return path


def save_meta(output_dir, frames, total_time):
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, 'meta.json')
    meta = {
        'frames': int(frames),
        'total_time': float(total_time),
        'fps': float(frames) / total_time if total_time > 0 else None,
    }
    with open(path, 'w') as f:
        json.dump(meta, f, indent=2)
    return path
