from typing import Optional, Tuple
import numpy as np
from PIL import Image, ImageDraw, ImageFont
from plate_reader.domain.models import BoundingBox
from plate_reader.ports.image_port import Color, ImageBackendPort


class PillowImageBackend(ImageBackendPort):
    """
    Pillow primitives over the same RGB uint8 arrays the OpenCV backend uses.
    """
    def __init__(self, font_path: Optional[str] = None, font_size: int = 24):
        if font_path:
            self.font = ImageFont.truetype(font_path, font_size)
        else:
            self.font = ImageFont.load_default()

    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        resized = Image.fromarray(image).resize((width, height), Image.Resampling.BILINEAR)
        return np.asarray(resized, dtype=np.uint8)

    def to_grayscale(self, image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return image
        return np.asarray(Image.fromarray(image).convert("L"), dtype=np.uint8)

    def draw_rectangle(self, image: np.ndarray, box: BoundingBox, color: Color, thickness: int) -> np.ndarray:
        canvas = Image.fromarray(image).copy()
        draw = ImageDraw.Draw(canvas)
        draw.rectangle(
            [box.x1, box.y1, box.x2 - 1, box.y2 - 1],
            outline=tuple(int(c) for c in color),
            width=thickness
        )
        return np.asarray(canvas, dtype=np.uint8).copy()

    def draw_text(self, image: np.ndarray, text: str, origin: Tuple[int, int], color: Color) -> np.ndarray:
        canvas = Image.fromarray(image).copy()
        draw = ImageDraw.Draw(canvas)
        draw.text((int(origin[0]), int(origin[1])), text, font=self.font, fill=tuple(int(c) for c in color))
        return np.asarray(canvas, dtype=np.uint8).copy()
