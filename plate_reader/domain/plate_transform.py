"""
Recognizer input transforms.

A cropped plate is resized (no letterboxing) and emitted as a uint8 NHWC
tensor holding raw byte intensities. Two layouts exist:

  grayscale  [1, H, W, 1]  luma, default 140x70
  color      [1, H, W, 3]  R, G, B, default 128x64
"""

from enum import Enum
from typing import Optional
import numpy as np
from plate_reader.core.errors import InvalidInputError
from plate_reader.domain.image_utils import ensure_rgb
from plate_reader.ports.image_port import ImageBackendPort


class PlateLayout(str, Enum):
    GRAYSCALE = "grayscale"
    COLOR = "color"


# (width, height)
DEFAULT_SIZES = {
    PlateLayout.GRAYSCALE: (140, 70),
    PlateLayout.COLOR: (128, 64),
}


class PlateTransform:
    layout: PlateLayout
    channels: int

    def __init__(self, backend: ImageBackendPort, width: Optional[int] = None, height: Optional[int] = None):
        default_w, default_h = DEFAULT_SIZES[self.layout]
        self.backend = backend
        self.width = default_w if width is None else width
        self.height = default_h if height is None else height
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid recognizer input size {self.width}x{self.height}")

    @property
    def input_shape(self):
        return (1, self.height, self.width, self.channels)

    def __call__(self, plate: np.ndarray) -> np.ndarray:
        if plate is None or plate.size == 0 or plate.shape[0] <= 0 or plate.shape[1] <= 0:
            raise InvalidInputError("Empty plate crop")
        resized = self.backend.resize(ensure_rgb(plate), self.width, self.height)
        pixels = self._channels(resized).reshape(self.height, self.width, self.channels)
        return np.ascontiguousarray(pixels[np.newaxis, ...], dtype=np.uint8)

    def _channels(self, resized: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class GrayscalePlateTransform(PlateTransform):
    layout = PlateLayout.GRAYSCALE
    channels = 1

    def _channels(self, resized: np.ndarray) -> np.ndarray:
        return self.backend.to_grayscale(resized)


class ColorPlateTransform(PlateTransform):
    layout = PlateLayout.COLOR
    channels = 3

    def _channels(self, resized: np.ndarray) -> np.ndarray:
        return resized


_TRANSFORMS = {
    PlateLayout.GRAYSCALE: GrayscalePlateTransform,
    PlateLayout.COLOR: ColorPlateTransform,
}


def make_plate_transform(
    layout,
    backend: ImageBackendPort,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> PlateTransform:
    try:
        cls = _TRANSFORMS[PlateLayout(layout)]
    except ValueError:
        raise ValueError(f"Unknown plate layout: {layout!r} (expected 'grayscale' or 'color')") from None
    return cls(backend, width=width, height=height)
