import itertools
import logging
import threading
import time
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class PhotoStore:
    def save(self, image: np.ndarray) -> None:
        raise NotImplementedError


class PhotoAlbum(PhotoStore):
    """Writes composited frames as PNG files into a directory.

    Saves may arrive from several threads at once; a sequence number keeps
    names unique within one album even inside the same millisecond.
    """

    def __init__(self, directory: Union[str, Path], prefix: str = "stand"):
        self.directory = Path(directory)
        self.prefix = prefix
        self._sequence = itertools.count()
        self._lock = threading.Lock()
        self._last_path: Optional[Path] = None

    @property
    def last_path(self) -> Optional[Path]:
        return self._last_path

    def _next_path(self) -> Path:
        now = time.time()
        stamp = time.strftime("%Y%m%d-%H%M%S", time.localtime(now))
        millis = int(now * 1000) % 1000
        with self._lock:
            seq = next(self._sequence)
        return self.directory / f"{self.prefix}_{stamp}_{millis:03d}_{seq:05d}.png"

    def save(self, image: np.ndarray) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._next_path()
        if not cv2.imwrite(str(path), image):
            raise OSError(f"Could not write photo to {path}")
        self._last_path = path
        logger.info("Saved photo to %s", path)
