from typing import Optional, Protocol
import numpy as np
from plate_reader.domain.models import OcrResult


class OcrPort(Protocol):
    def predict(self, plate: np.ndarray) -> Optional[OcrResult]:
        ...
