"""Tracker configuration with the defaults used by the CLI."""
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2


@dataclass
class TrackerConfig:
    # Histogram
    hist_bins: int = 16
    hue_range: Tuple[int, int] = (0, 180)      # 8-bit hue encoding
    hsv_mask: Optional[Tuple[Tuple[float, float, float], Tuple[float, float, float]]] = None

    # CamShift termination
    max_iter: int = 10
    epsilon: float = 1.0                        # px

    # Keys
    select_key: str = 'i'
    quit_key: str = 'q'
    save_key: str = 's'

    # Display
    window_name: str = 'frame'
    backprojection_window: str = 'Back Projection'
    poll_delay_ms: int = 1
    selection_poll_ms: int = 30
    box_color: Tuple[int, int, int] = (0, 255, 0)
    box_thickness: int = 2
    marker_radius: int = 4
    marker_thickness: int = 2
    show_backprojection: bool = False

    # Recording
    output_dir: Optional[str] = None

    def __post_init__(self):
        if self.hist_bins < 1:
            raise ValueError(f"hist_bins must be positive, got {self.hist_bins}")
        if self.max_iter < 1:
            raise ValueError(f"max_iter must be positive, got {self.max_iter}")
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")
        lo, hi = self.hue_range
        if not 0 <= lo < hi:
            raise ValueError(f"Invalid hue_range: {self.hue_range}")
        for name in ('select_key', 'quit_key', 'save_key'):
            key = getattr(self, name)
            if not isinstance(key, str) or len(key) != 1:
                raise ValueError(f"{name} must be a single character, got {key!r}")

    @property
    def term_criteria(self):
        return (cv2.TERM_CRITERIA_EPS | cv2.TERM_CRITERIA_COUNT, self.max_iter, self.epsilon)
