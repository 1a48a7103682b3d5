"""Frame source and display wrappers around OpenCV capture and HighGUI.

The display turns mouse and keyboard input into plain event values that the
main loop consumes from `poll()`; nothing else is mutated from the callback.
"""
from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Union

import cv2
import numpy as np


class FrameSourceError(RuntimeError):
    """Camera or video file could not be opened."""


@dataclass(frozen=True)
class Click:
    x: int
    y: int


@dataclass(frozen=True)
class KeyPress:
    key: str


class FrameSource:
    """`cv2.VideoCapture` over a device index or a video file path."""

    def __init__(self, source: Union[int, str] = 0):
        self.source = source
        self.cap: Optional[cv2.VideoCapture] = None

    def open(self) -> "FrameSource":
        self.cap = cv2.VideoCapture(self.source)
        if not self.cap.isOpened():
            self.cap = None
            what = f"camera {self.source}" if isinstance(self.source, int) else f"video '{self.source}'"
            raise FrameSourceError(f"Could not open {what}")
        return self

    def read(self) -> Optional[np.ndarray]:
        if self.cap is None:
            return None
        ret, frame = self.cap.read()
        return frame if ret and frame is not None else None

    def release(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.release()


class OpenCVDisplay:
    """One named window; clicks are queued and handed out by `poll()`."""

    def __init__(self, window_name: str = 'frame'):
        self.window_name = window_name
        self._clicks = deque()

    def _on_mouse(self, event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN:
            self._clicks.append(Click(x, y))

    def open(self) -> None:
        cv2.namedWindow(self.window_name)
        cv2.setMouseCallback(self.window_name, self._on_mouse)

    def show(self, frame: np.ndarray, window_name: Optional[str] = None) -> None:
        cv2.imshow(window_name or self.window_name, frame)

    def poll(self, delay_ms: int = 1) -> List[Union[Click, KeyPress]]:
        key = cv2.waitKey(delay_ms)
        events = []
        while self._clicks:
            events.append(self._clicks.popleft())
        if key != -1 and (key & 0xFF) != 255:
            events.append(KeyPress(chr(key & 0xFF)))
        return events

    def close(self) -> None:
        cv2.destroyAllWindows()
        cv2.waitKey(1)
