from typing import List, Protocol
import numpy as np
from plate_reader.domain.models import DetectionResult


class PlateDetectorPort(Protocol):
    def predict(self, frame: np.ndarray) -> List[DetectionResult]:
        ...
