from typing import Protocol, Tuple
import numpy as np
from plate_reader.domain.models import BoundingBox

Color = Tuple[int, int, int]


class ImageBackendPort(Protocol):
    """
    Image primitives over RGB uint8 arrays. Drawing returns a new array.
    """
    def resize(self, image: np.ndarray, width: int, height: int) -> np.ndarray:
        ...

    def to_grayscale(self, image: np.ndarray) -> np.ndarray:
        ...

    def draw_rectangle(self, image: np.ndarray, box: BoundingBox, color: Color, thickness: int) -> np.ndarray:
        ...

    def draw_text(self, image: np.ndarray, text: str, origin: Tuple[int, int], color: Color) -> np.ndarray:
        ...
