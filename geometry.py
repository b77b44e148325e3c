import math
from typing import Tuple

# Keeps rounded coordinates plus line width and radius inside a C int.
MAX_PIXEL_COORD = float(1 << 30)


def to_pixel(position: Tuple[float, float]) -> Tuple[int, int]:
    x, y = position
    return int(round(x)), int(round(y))


def is_drawable(position: Tuple[float, float]) -> bool:
    return all(math.isfinite(v) and abs(v) <= MAX_PIXEL_COORD for v in position)


def strictly_increasing(*values: float) -> bool:
    return all(a < b for a, b in zip(values, values[1:]))


def overlay_rect(image_size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    # Two thirds of the frame, centered at (width / 2, height / 3).
    # Returns (left, top, width, height) in pixels.
    width, height = image_size
    overlay_w = width * 2 // 3
    overlay_h = height * 2 // 3
    left = int(round(width / 2.0 - overlay_w / 2.0))
    top = int(round(height / 3.0 - overlay_h / 2.0))
    return left, top, overlay_w, overlay_h
