"""
Letterbox transform for the plate detector.

The frame is scaled to fit a square canvas without changing its aspect
ratio, centered on a neutral gray background, and emitted as a float32
NCHW tensor normalized to [0, 1]. The returned geometry maps detector
coordinates back to the original frame.
"""

from typing import Tuple
import numpy as np
from plate_reader.core.errors import InvalidInputError
from plate_reader.domain.image_utils import ensure_rgb, frame_size
from plate_reader.domain.models import LetterboxGeometry
from plate_reader.ports.image_port import ImageBackendPort

PAD_COLOR = (114, 114, 114)
DEFAULT_TARGET_SIZE = 384


def letterbox_geometry(width: int, height: int, target: int = DEFAULT_TARGET_SIZE) -> Tuple[LetterboxGeometry, int, int]:
    """
    Returns the geometry plus the resized (unpadded) width and height.

    Padding is split evenly, so pad_x / pad_y can end in .5.
    """
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Zero-size image ({width}x{height})")
    if target <= 0:
        raise InvalidInputError(f"Invalid letterbox target size {target}")

    ratio = min(target / width, target / height)
    # Extreme aspect ratios would otherwise round a side down to nothing
    new_w = max(1, round(width * ratio))
    new_h = max(1, round(height * ratio))
    pad_x = (target - new_w) / 2
    pad_y = (target - new_h) / 2
    return LetterboxGeometry(ratio=ratio, pad_x=pad_x, pad_y=pad_y), new_w, new_h


def paste_offset(geometry: LetterboxGeometry) -> Tuple[int, int]:
    # The -0.1 bias rounds an exact .5 padding down, as in the detector's training pipeline
    return round(geometry.pad_x - 0.1), round(geometry.pad_y - 0.1)


def letterbox_image(
    img: np.ndarray,
    backend: ImageBackendPort,
    target: int = DEFAULT_TARGET_SIZE,
) -> Tuple[np.ndarray, LetterboxGeometry]:
    """Returns the padded target x target RGB canvas and its geometry."""
    img = ensure_rgb(img)
    w, h = frame_size(img)
    geometry, new_w, new_h = letterbox_geometry(w, h, target)

    canvas = np.empty((target, target, 3), dtype=np.uint8)
    canvas[:, :] = PAD_COLOR

    resized = img if (new_w, new_h) == (w, h) else backend.resize(img, new_w, new_h)
    left, top = paste_offset(geometry)
    canvas[top:top + new_h, left:left + new_w] = resized
    return canvas, geometry


def to_nchw_tensor(canvas: np.ndarray) -> np.ndarray:
    """HWC uint8 -> [1, 3, H, W] float32 in [0, 1]."""
    chw = canvas.transpose(2, 0, 1).astype(np.float32) / 255.0
    return np.ascontiguousarray(chw[np.newaxis, ...])


def letterbox(
    img: np.ndarray,
    backend: ImageBackendPort,
    target: int = DEFAULT_TARGET_SIZE,
) -> Tuple[np.ndarray, LetterboxGeometry]:
    canvas, geometry = letterbox_image(img, backend, target)
    return to_nchw_tensor(canvas), geometry
