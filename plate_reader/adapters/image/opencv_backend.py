from typing import Tuple
import cv2
import numpy as np
from plate_reader.domain.models import BoundingBox
from plate_reader.ports.image_port import Color, ImageBackendPort


class OpenCvImageBackend(ImageBackendPort):
    """
    OpenCV primitives. Arrays are treated as RGB, so colors are given as (R, G, B).
    """
    def __init__(self, font_scale: float = 0.9, font_thickness: int = 2):
        self.font = cv2.FONT_HERSHEY_SIMPLEX
        self.font_scale = font_scale
        self.font_thickness = font_thickness

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        return cv2.resize(image, (width, height), interpolation=cv2.INTER_LINEAR)

    def to_grayscale(self, image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return image
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)

    def draw_rectangle(self, image: np.ndarray, box: BoundingBox, color: Color, thickness: int) -> np.ndarray:
        out = np.ascontiguousarray(image).copy()
        # cv2.rectangle takes inclusive corners
        cv2.rectangle(out, (box.x1, box.y1), (box.x2 - 1, box.y2 - 1), tuple(int(c) for c in color), thickness)
        return out

    def draw_text(self, image: np.ndarray, text: str, origin: Tuple[int, int], color: Color) -> np.ndarray:
        out = np.ascontiguousarray(image).copy()
        (_, text_h), _ = cv2.getTextSize(text, self.font, self.font_scale, self.font_thickness)
        # putText anchors at the baseline; origin is the top-left corner
        x, y = origin
        cv2.putText(
            out, text, (int(x), int(y) + text_h),
            self.font, self.font_scale, tuple(int(c) for c in color),
            self.font_thickness, cv2.LINE_AA
        )
        return out
