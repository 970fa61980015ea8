from pydantic import BaseModel, ConfigDict, model_validator
from typing import List, Optional, Tuple


class BoundingBox(BaseModel):
    """Top-left / bottom-right corners in original image coordinates."""
    model_config = ConfigDict(frozen=True)

    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def clamp(self, frame_width: int, frame_height: int) -> "BoundingBox":
        # Upper bounds are exclusive: x2/y2 may equal the frame size.
        return BoundingBox(
            x1=max(self.x1, 0),
            y1=max(self.y1, 0),
            x2=min(self.x2, frame_width),
            y2=min(self.y2, frame_height),
        )

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class DetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    confidence: float
    box: BoundingBox


class OcrResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    confidence: List[float]

    @model_validator(mode="after")
    def _one_score_per_char(self):
        if len(self.text) != len(self.confidence):
            raise ValueError(
                f"text has {len(self.text)} characters but "
                f"{len(self.confidence)} confidences were given"
            )
        return self

    @property
    def mean_confidence(self) -> float:
        if not self.confidence:
            return 0.0
        return sum(self.confidence) / len(self.confidence)


class AlprResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    detection: DetectionResult
    ocr: Optional[OcrResult] = None


class LetterboxGeometry(BaseModel):
    """Scale and padding applied when fitting a frame into the detector canvas."""
    model_config = ConfigDict(frozen=True)

    ratio: float
    pad_x: float
    pad_y: float

    def to_original(self, x: float, y: float) -> Tuple[float, float]:
        return (x - self.pad_x) / self.ratio, (y - self.pad_y) / self.ratio

    def to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.ratio + self.pad_x, y * self.ratio + self.pad_y
