import time
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np

from .capture import Click, KeyPress
from .config import TrackerConfig
from .features import crop_roi, extract_hue_histogram, compute_backprojection, visualize_backprojection
from .utils import (ROISelector, draw_selection_marker, visualize_tracking,
                    save_frame, save_prediction, save_meta)


@dataclass(frozen=True)
class TrackedRegion:
    """Oriented rectangle: center (x, y), size (w, h), angle in degrees"""
    center: Tuple[float, float]
    size: Tuple[float, float]
    angle: float = 0.0

    @classmethod
    def from_box(cls, box):
        x, y, w, h = box
        return cls((x + w / 2.0, y + h / 2.0), (float(w), float(h)), 0.0)

    @classmethod
    def from_rotated_rect(cls, rect):
        (cx, cy), (w, h), angle = rect
        return cls((float(cx), float(cy)), (float(w), float(h)), float(angle))

    @property
    def is_empty(self):
        return self.size[0] <= 0 or self.size[1] <= 0

    @property
    def is_finite(self):
        return bool(np.all(np.isfinite([*self.center, *self.size, self.angle])))

    def as_rotated_rect(self):
        return (self.center, self.size, self.angle)

    def points(self):
        """The 4 corners, float32 array of shape (4, 2)"""
        return cv2.boxPoints(self.as_rotated_rect())

    def bounding_box(self):
        pts = self.points()
        x1, y1 = np.floor(pts.min(axis=0))
        x2, y2 = np.ceil(pts.max(axis=0))
        return (int(x1), int(y1), int(x2 - x1), int(y2 - y1))


@dataclass
class TrackState:
    track_window: Optional[Tuple[int, int, int, int]] = None   # (x, y, w, h), seed of the next search
    model: Optional[np.ndarray] = None                          # normalized hue histogram
    region: Optional[TrackedRegion] = None                      # last result
    frames_tracked: int = 0


class CamShiftStrategy:
    def __init__(self, config: TrackerConfig):
        self.config = config
        self.term_crit = config.term_criteria

    def init(self, state: TrackState, frame, roi):
        roi_region = crop_roi(frame, roi)
        state.model = extract_hue_histogram(roi_region,
                                            bins=self.config.hist_bins,
                                            hue_range=self.config.hue_range,
                                            mask_bounds=self.config.hsv_mask)
        state.track_window = tuple(int(v) for v in roi)
        state.region = TrackedRegion.from_box(state.track_window)
        state.frames_tracked = 0

    def search(self, state: TrackState, prob) -> TrackedRegion:
        """
        CamShift on a probability map, seeded at `state.track_window`

        With no probability mass under the seed, CamShift has nothing to converge
        on and the seed box is returned unchanged. The same holds when it comes
        back with an empty or non-finite result.
        """
        seed = state.track_window
        x, y, w, h = seed
        H, W = prob.shape[:2]
        x1, y1 = max(0, x), max(0, y)
        x2, y2 = min(W, x + w), min(H, y + h)
        if x2 <= x1 or y2 <= y1 or not np.any(prob[y1:y2, x1:x2]):
            state.region = TrackedRegion.from_box(seed)
            return state.region

        rot_rect, window = cv2.CamShift(prob, seed, self.term_crit)
        region = TrackedRegion.from_rotated_rect(rot_rect)
        if window[2] <= 0 or window[3] <= 0 or region.is_empty or not region.is_finite:
            region = TrackedRegion.from_box(seed)
        else:
            state.track_window = tuple(int(v) for v in window)
        state.region = region
        return region

    def update(self, state: TrackState, frame) -> TrackedRegion:
        prob = compute_backprojection(frame, state.model, self.config.hue_range)
        region = self.search(state, prob)
        state.frames_tracked += 1
        return region


class ClassicalTracker:
    """
    Interactive CamShift tracker

    Owns everything the loop needs (selector, tracking state, quit flag). The
    display only reports input as Click / KeyPress values from `poll()`.
    """

    def __init__(self, source, display, config: Optional[TrackerConfig] = None):
        self.source = source
        self.display = display
        self.config = config or TrackerConfig()
        self.state = TrackState()
        self.strategy = CamShiftStrategy(self.config)
        self.selector = ROISelector()
        self._quit = False

    @property
    def tracking(self):
        return self.state.model is not None

    def initialize(self, frame, roi):
        self.strategy.init(self.state, frame, roi)

    def update(self, frame):
        return self.strategy.update(self.state, frame)

    def select_roi(self, frame):
        """
        Freeze `frame` and collect 4 clicks

        Returns the ROI box, or None when the quit key cancelled the selection.
        """
        cfg = self.config
        self.selector.begin()
        canvas = frame.copy()

        while self.selector.selecting:
            self.display.show(canvas)
            for event in self.display.poll(cfg.selection_poll_ms):
                if isinstance(event, KeyPress) and event.key == cfg.quit_key:
                    self.selector.cancel()
                    self._quit = True
                    break
                if not isinstance(event, Click) or not self.selector.add_point(event.x, event.y):
                    continue
                if self.selector.selecting and not self.selector.points:
                    # degenerate box, start over on a clean frame
                    canvas = frame.copy()
                else:
                    draw_selection_marker(canvas, (event.x, event.y), cfg.marker_radius,
                                          cfg.box_color, cfg.marker_thickness)

        return self.selector.box

    def _record(self, frame_count, region):
        try:
            save_prediction(self.config.output_dir, frame_count, region.bounding_box())
        except OSError as e:
            print(f"Failed to save prediction for frame {frame_count}: {e}")

    def _handle_key(self, key, clean, frame, frame_count):
        cfg = self.config
        if key == cfg.select_key and len(self.selector.points) < ROISelector.max_points:
            print("Select ROI: click the 4 corners of the object")
            roi = self.select_roi(clean)
            if roi is None:
                return
            try:
                self.initialize(clean, roi)
            except ValueError as e:
                print(f"Failed to initialize tracker: {e}")
                return
            print(f"Tracking ROI {roi}")
        elif key == cfg.quit_key:
            self._quit = True
        elif key == cfg.save_key and cfg.output_dir:
            try:
                save_frame(frame, frame_count, cfg.output_dir)
            except OSError as e:
                print(f"Failed to save frame {frame_count}: {e}")
                return
            print(f"Saved frame {frame_count}")

    def run(self):
        """Main loop. Returns the number of frames read."""
        cfg = self.config
        print(f"Press '{cfg.select_key}' to select a region, '{cfg.quit_key}' to quit")

        frame_count = 0
        start_time = time.time()
        try:
            self.display.open()
            while not self._quit:
                frame = self.source.read()
                if frame is None:
                    break
                frame_count += 1
                clean = frame.copy()

                if self.tracking:
                    region = self.update(frame)
                    visualize_tracking(frame, region, cfg.box_color, cfg.box_thickness)
                    if cfg.show_backprojection:
                        backproj = visualize_backprojection(clean, self.state.model, self.state.track_window,
                                                            window_name=None, hue_range=cfg.hue_range)
                        self.display.show(backproj, cfg.backprojection_window)
                    if cfg.output_dir:
                        self._record(frame_count, region)

                self.display.show(frame)
                for event in self.display.poll(cfg.poll_delay_ms):
                    if isinstance(event, KeyPress):
                        self._handle_key(event.key, clean, frame, frame_count)
                    if self._quit:
                        break
        finally:
            self.source.release()
            self.display.close()

        total_time = time.time() - start_time
        if cfg.output_dir and frame_count:
            try:
                save_meta(cfg.output_dir, frame_count, total_time)
            except OSError as e:
                print(f"Failed to save meta: {e}")

        print(f"Tracking finished. Total frames: {frame_count}")
        return frame_count
