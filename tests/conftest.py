import numpy as np
import pytest

from camshift_tracker.capture import Click


class FakeDisplay:
    """Display double: returns scripted event batches from poll(), records what was shown."""

    max_polls = 10000

    def __init__(self, script=()):
        self.script = list(script)
        self.shown = []
        self.polls = 0
        self.opened = False
        self.closed = False

    def open(self):
        self.opened = True

    def show(self, frame, window_name=None):
        self.shown.append((window_name, frame.copy()))

    def poll(self, delay_ms=1):
        self.polls += 1
        assert self.polls < self.max_polls, "display polled forever"
        return self.script.pop(0) if self.script else []

    def close(self):
        self.closed = True


@pytest.fixture
def make_display():
    return FakeDisplay


@pytest.fixture
def corner_clicks():
    def _clicks(box):
        x, y, w, h = box
        return [Click(x, y), Click(x + w, y), Click(x, y + h), Click(x + w, y + h)]
    return _clicks


@pytest.fixture
def square_frame():
    """Gray 320x240 frame with a pure green 41x41 square at (100, 100)"""
    frame = np.full((240, 320, 3), 128, dtype=np.uint8)
    frame[100:141, 100:141] = (0, 255, 0)
    return frame
