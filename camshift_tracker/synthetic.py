"""
Synthetic test video: a solid square moving left to right on a uniform background
"""
import numpy as np


def square_box(index, size=40, start_x=10, y=100, step=4):
    """Ground-truth (x, y, w, h) of the square in frame `index` (0-based)"""
    return (start_x + index * step, y, size, size)


def moving_square_frames(n_frames=60, width=320, height=240, size=40, start_x=10, y=100, step=4,
                         color=(0, 255, 0), background=(128, 128, 128)):
    """Yield BGR frames; the square leaves the frame once x passes `width`"""
    for i in range(n_frames):
        frame = np.empty((height, width, 3), dtype=np.uint8)
        frame[:] = background
        x, y0, w, h = square_box(i, size, start_x, y, step)
        x1, x2 = max(0, x), min(width, x + w)
        if x2 > x1:
            frame[y0:y0 + h, x1:x2] = color
        yield frame


class SyntheticSource:
    """Frame source over generated frames, same interface as FrameSource"""

    def __init__(self, frames):
        self._frames = iter(frames)
        self.released = False

    def read(self):
        if self.released:
            return None
        return next(self._frames, None)

    def release(self):
        self.released = True
