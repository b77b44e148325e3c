"""Frame source for the live view.

Wraps an OpenCV capture device and yields BGR frames at a steady rate. When
a read fails the source yields a placeholder card instead of stopping, so the
display loop keeps running while the device recovers.
"""

import logging
import time
from typing import Iterator, Optional, Tuple

import cv2
import numpy as np

from visualization import draw_caption

logger = logging.getLogger(__name__)


class FrameSource:
    def __init__(
        self,
        camera_index: int = 0,
        size: Tuple[int, int] = (1280, 720),
        target_fps: float = 30.0,
        placeholder_size: Tuple[int, int] = (640, 480),
    ):
        self.camera_index = camera_index
        self.size = size
        self.target_fps = target_fps
        self.placeholder_size = placeholder_size
        self._capture: Optional[cv2.VideoCapture] = None
        self.failed_reads = 0

    def __enter__(self) -> "FrameSource":
        if not self.open():
            raise RuntimeError(f"Could not open camera {self.camera_index}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> bool:
        capture = cv2.VideoCapture(self.camera_index)
        if not capture.isOpened():
            logger.error("Camera %d did not open", self.camera_index)
            capture.release()
            return False
        width, height = self.size
        capture.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        if self.target_fps > 0:
            capture.set(cv2.CAP_PROP_FPS, self.target_fps)
        self._capture = capture
        return True

    def placeholder(self, message: str = "Camera error") -> np.ndarray:
        width, height = self.placeholder_size
        card = np.zeros((height, width, 3), dtype=np.uint8)
        draw_caption(card, [message])
        return card

    def frames(self) -> Iterator[Tuple[np.ndarray, bool]]:
        """Yield (frame, live) pairs until the source is closed.

        live is False for placeholder frames.
        """
        period = 1.0 / self.target_fps if self.target_fps > 0 else 0.0
        next_due = time.monotonic()
        while self._capture is not None:
            if period:
                delay = next_due - time.monotonic()
                if delay > 0:
                    time.sleep(delay)
                next_due = max(next_due + period, time.monotonic())

            ok, frame = self._capture.read()
            if ok and frame is not None:
                self.failed_reads = 0
                yield frame, True
                continue

            self.failed_reads += 1
            if self.failed_reads == 1:
                logger.warning("Camera %d read failed", self.camera_index)
            yield self.placeholder(), False

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
