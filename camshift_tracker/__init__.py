"""
CamShift hue tracking package
"""
from .config import TrackerConfig
from .capture import FrameSource, FrameSourceError, OpenCVDisplay, Click, KeyPress
from .classical_tracker import ClassicalTracker, CamShiftStrategy, TrackState, TrackedRegion
from .utils import ROISelector, SelectorState, derive_roi_box, visualize_tracking, save_frame
from .features import (
    extract_hue_histogram,
    normalize_histogram,
    compute_backprojection,
    visualize_backprojection
)

__all__ = [
    'TrackerConfig',
    'FrameSource',
    'FrameSourceError',
    'OpenCVDisplay',
    'Click',
    'KeyPress',
    'ClassicalTracker',
    'CamShiftStrategy',
    'TrackState',
    'TrackedRegion',
    'ROISelector',
    'SelectorState',
    'derive_roi_box',
    'visualize_tracking',
    'save_frame',
    'extract_hue_histogram',
    'normalize_histogram',
    'compute_backprojection',
    'visualize_backprojection'
]
