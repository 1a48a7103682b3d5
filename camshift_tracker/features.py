"""
Hue features for tracking
Histogram of the selected region and its back-projection over whole frames
"""
import cv2
import numpy as np


def crop_roi(frame, box):
    """Return the part of `frame` covered by `box` (x, y, w, h), clipped to the frame."""
    x, y, w, h = box
    H, W = frame.shape[:2]
    x1, y1 = max(0, int(x)), max(0, int(y))
    x2, y2 = min(W, int(x + w)), min(H, int(y + h))
    if x2 <= x1 or y2 <= y1:
        raise ValueError(f"ROI {box} does not overlap the {W}x{H} frame")
    return frame[y1:y2, x1:x2]


def normalize_histogram(hist):
    # Min-max into [0, 255] so the histogram doubles as a back-projection lookup table.
    # A flat histogram (all zero included) comes out all zero.
    cv2.normalize(hist, hist, 0, 255, cv2.NORM_MINMAX)
    return hist


def extract_hue_histogram(roi, bins=16, hue_range=(0, 180), mask_bounds=None):
    """
    Hue histogram of a BGR region, normalized to [0, 255]

    Args:
        roi: BGR image of the selected region (left untouched)
        bins: number of hue bins
        hue_range: (low, high) hue values covered, high exclusive
        mask_bounds: optional ((h, s, v), (h, s, v)) bounds; pixels outside are not counted

    Returns:
        float32 array of shape (bins, 1)
    """
    hsv = cv2.cvtColor(roi, cv2.COLOR_BGR2HSV)

    mask = None
    if mask_bounds is not None:
        lower, upper = mask_bounds
        mask = cv2.inRange(hsv, np.array(lower, dtype=np.float64), np.array(upper, dtype=np.float64))

    # some OpenCV releases return a flat (bins,) array
    hist = cv2.calcHist([hsv], [0], mask, [bins], list(hue_range)).reshape(-1, 1)
    return normalize_histogram(hist)


def compute_backprojection(frame, hist, hue_range=(0, 180)):
    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    return cv2.calcBackProject([hsv], [0], hist, list(hue_range), 1)


def visualize_backprojection(frame, hist, track_window=None, window_name='Back Projection',
                             hue_range=(0, 180)):
    """
    Show the probability map the tracker searches, with the current window on it

    Args:
        window_name: if None, don't show a window
    """
    backproj = compute_backprojection(frame, hist, hue_range)
    backproj_img = cv2.cvtColor(backproj, cv2.COLOR_GRAY2BGR)

    if track_window is not None:
        x, y, w, h = track_window
        cv2.rectangle(backproj_img, (x, y), (x + w, y + h), (0, 255, 0), 2)

    if window_name is not None:
        cv2.imshow(window_name, backproj_img)

    return backproj_img
