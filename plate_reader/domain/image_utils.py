import numpy as np
import cv2
from plate_reader.core.errors import InvalidInputError
from plate_reader.domain.models import BoundingBox


def ensure_rgb(img: np.ndarray) -> np.ndarray:
    """
    Normalizes a frame to a uint8 H x W x 3 RGB array.
    Grayscale frames are replicated across channels, RGBA loses its alpha.
    """
    if img is None or img.size == 0:
        raise InvalidInputError("Empty image")

    if img.ndim == 2:
        img = np.stack([img, img, img], axis=-1)
    elif img.ndim == 3 and img.shape[2] == 1:
        img = np.repeat(img, 3, axis=2)
    elif img.ndim == 3 and img.shape[2] == 4:
        img = np.ascontiguousarray(img[:, :, :3])
    elif img.ndim != 3 or img.shape[2] != 3:
        raise InvalidInputError(f"Unsupported image shape {img.shape}")

    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    return img


def frame_size(img: np.ndarray):
    h, w = img.shape[:2]
    if w <= 0 or h <= 0:
        raise InvalidInputError(f"Zero-size image ({w}x{h})")
    return w, h


def crop(img: np.ndarray, box: BoundingBox) -> np.ndarray:
    """Crops to a box already clamped to the frame."""
    if box.is_empty():
        raise InvalidInputError(f"Degenerate crop {box}")
    return img[box.y1:box.y2, box.x1:box.x2]


def decode_image(data: bytes) -> np.ndarray:
    """Decodes JPG/PNG/WEBP bytes into an RGB frame."""
    if not data:
        raise InvalidInputError("Empty file")

    img_array = np.frombuffer(data, np.uint8)
    img = cv2.imdecode(img_array, cv2.IMREAD_COLOR)
    if img is None:
        raise InvalidInputError("Could not decode image")
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def encode_jpeg(img_rgb: np.ndarray) -> bytes:
    success, buffer = cv2.imencode(".jpg", cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR))
    if not success:
        raise InvalidInputError("Could not encode image")
    return buffer.tobytes()
