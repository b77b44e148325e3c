import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np

from geometry import is_drawable, overlay_rect, to_pixel
from photo_store import PhotoStore
from pose_types import JOINT_SEGMENTS, Joint, Pose

logger = logging.getLogger(__name__)

# BGR
TEAL = (199, 176, 48)
PINK = (85, 45, 255)


@dataclass
class RenderStyle:
    segment_line_width: int = 2
    segment_color: Tuple[int, int, int] = TEAL
    joint_radius: int = 4
    joint_color: Tuple[int, int, int] = PINK


def to_uint8(image: np.ndarray) -> np.ndarray:
    # 16-bit PNGs and float images keep their depth under IMREAD_UNCHANGED.
    if image.dtype == np.uint8:
        return image
    if np.issubdtype(image.dtype, np.integer):
        scale = 255.0 / np.iinfo(image.dtype).max
    else:
        scale = 255.0
    return cv2.convertScaleAbs(image, alpha=scale)


def load_overlay(path: Union[str, Path]) -> Optional[np.ndarray]:
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        logger.warning("Overlay image not found or unreadable: %s", path)
        return None
    return to_uint8(image)


class SkeletonRenderer:
    """Composites pose wireframes, or the stand overlay, onto frames."""

    def __init__(
        self,
        style: Optional[RenderStyle] = None,
        overlay_image: Optional[np.ndarray] = None,
        photo_store: Optional[PhotoStore] = None,
        flip_frame: bool = True,
    ):
        self.style = style or RenderStyle()
        self.overlay_image = overlay_image
        self.photo_store = photo_store
        self.flip_frame = flip_frame
        self._pending: List[threading.Thread] = []

    def render(self, poses: Iterable[Pose], frame: np.ndarray, draw_skeleton: bool) -> np.ndarray:
        """Return a new image of the frame with the poses or the overlay on top.

        The input frame is never modified.
        """
        canvas = self._background(frame)
        if draw_skeleton:
            for pose in poses:
                self._draw_pose(canvas, pose)
        else:
            self._draw_overlay(canvas)
            self._persist(canvas)
        return canvas

    def _background(self, frame: np.ndarray) -> np.ndarray:
        if frame.ndim == 2:
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
        if self.flip_frame:
            # The raw buffer is stored bottom-up.
            return cv2.flip(frame, 0)
        return frame.copy()

    def _draw_pose(self, canvas: np.ndarray, pose: Pose) -> None:
        for segment in JOINT_SEGMENTS:
            joint_a = pose[segment.joint_a]
            joint_b = pose[segment.joint_b]
            if not (_drawable(joint_a) and _drawable(joint_b)):
                continue
            self._draw_line(canvas, joint_a, joint_b)

        # Joints go above the segment lines.
        for joint in pose.valid_joints():
            if not _drawable(joint):
                continue
            self._draw_circle(canvas, joint)

    def _draw_line(self, canvas: np.ndarray, parent: Joint, child: Joint) -> None:
        cv2.line(
            canvas,
            to_pixel(parent.position),
            to_pixel(child.position),
            self.style.segment_color,
            int(self.style.segment_line_width),
        )

    def _draw_circle(self, canvas: np.ndarray, joint: Joint) -> None:
        cv2.circle(
            canvas,
            to_pixel(joint.position),
            int(round(self.style.joint_radius)),
            self.style.joint_color,
            -1,
        )

    def _draw_overlay(self, canvas: np.ndarray) -> None:
        if self.overlay_image is None:
            return
        height, width = canvas.shape[:2]
        left, top, overlay_w, overlay_h = overlay_rect((width, height))
        if overlay_w <= 0 or overlay_h <= 0:
            return

        overlay = cv2.resize(to_uint8(self.overlay_image), (overlay_w, overlay_h), interpolation=cv2.INTER_AREA)
        if overlay.ndim == 2:
            overlay = cv2.cvtColor(overlay, cv2.COLOR_GRAY2BGR)

        x0, y0 = max(left, 0), max(top, 0)
        x1, y1 = min(left + overlay_w, width), min(top + overlay_h, height)
        if x1 <= x0 or y1 <= y0:
            return
        patch = overlay[y0 - top:y1 - top, x0 - left:x1 - left]
        roi = canvas[y0:y1, x0:x1, :3]

        if patch.shape[2] == 4:
            alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
            blended = alpha * patch[:, :, :3] + (1.0 - alpha) * roi
            canvas[y0:y1, x0:x1, :3] = np.round(blended).astype(canvas.dtype)
        else:
            canvas[y0:y1, x0:x1, :3] = patch[:, :, :3]

    def _persist(self, image: np.ndarray) -> None:
        # Fire-and-forget; the frame loop never waits on the save.
        if self.photo_store is None:
            return
        self._pending = [t for t in self._pending if t.is_alive()]
        worker = threading.Thread(target=self._save_photo, args=(image.copy(),), daemon=True)
        worker.start()
        self._pending.append(worker)

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait for every photo save still in flight, up to timeout seconds in total."""
        deadline = None if timeout is None else time.monotonic() + timeout
        for worker in self._pending:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            worker.join(remaining)
        self._pending = [t for t in self._pending if t.is_alive()]

    @property
    def pending_saves(self) -> int:
        return sum(1 for t in self._pending if t.is_alive())

    def _save_photo(self, image: np.ndarray) -> None:
        try:
            self.photo_store.save(image)
        except Exception:
            logger.exception("Saving photo failed")


def _drawable(joint: Joint) -> bool:
    return joint.is_valid and is_drawable(joint.position)


def draw_caption(
    frame: np.ndarray,
    lines: Sequence[str],
    origin: Tuple[int, int] = (10, 10),
    color: Tuple[int, int, int] = (255, 255, 255),
    background: Tuple[int, int, int] = (30, 30, 30),
    scale: float = 0.7,
    padding: int = 6,
) -> None:
    """Draw text lines top-down from origin, each on a filled backing box."""
    x, top = origin
    for line in lines:
        (text_w, text_h), baseline = cv2.getTextSize(line, cv2.FONT_HERSHEY_SIMPLEX, scale, 2)
        bottom = top + text_h + baseline + 2 * padding
        cv2.rectangle(frame, (x, top), (x + text_w + 2 * padding, bottom), background, -1)
        cv2.putText(
            frame, line, (x + padding, top + padding + text_h), cv2.FONT_HERSHEY_SIMPLEX, scale, color, 2
        )
        top = bottom + 2
