import logging
from typing import List, Optional, Sequence, Tuple
import numpy as np
from plate_reader.core.errors import ModelInvocationError
from plate_reader.domain import image_utils
from plate_reader.domain.models import AlprResult
from plate_reader.ports.detector_port import PlateDetectorPort
from plate_reader.ports.image_port import Color, ImageBackendPort
from plate_reader.ports.ocr_port import OcrPort

logger = logging.getLogger(__name__)

BOX_COLOR: Color = (50, 205, 50)
SHADOW_COLOR: Color = (0, 0, 0)
TEXT_COLOR: Color = (255, 255, 255)
TEXT_OFFSET_Y = 25
SHADOW_OFFSET = 2


def format_label(text: str, mean_confidence: float) -> str:
    return f"{text} {mean_confidence:.0%}"


class AlprEngine:
    """
    Detector -> crop -> recognizer, one frame at a time.

    Detections whose box falls outside the frame once clamped are dropped
    silently. A recognizer failure only affects its own detection, which is
    kept with ocr=None; a detector failure propagates.
    """
    def __init__(self, detector: PlateDetectorPort, ocr: OcrPort, backend: Optional[ImageBackendPort] = None):
        self.detector = detector
        self.ocr = ocr
        self.backend = backend

    def predict(self, frame: np.ndarray) -> List[AlprResult]:
        frame = image_utils.ensure_rgb(frame)
        frame_w, frame_h = image_utils.frame_size(frame)

        detections = self.detector.predict(frame)
        results = []
        for detection in detections:
            box = detection.box.clamp(frame_w, frame_h)
            if box.is_empty():
                logger.debug("Dropping detection outside frame: %s", detection.box)
                continue

            plate = image_utils.crop(frame, box)
            try:
                ocr_result = self.ocr.predict(plate)
            except ModelInvocationError:
                logger.warning("Recognizer failed for detection %s, skipping OCR", box, exc_info=True)
                ocr_result = None

            results.append(AlprResult(detection=detection, ocr=ocr_result))

        logger.debug("Frame %dx%d: %d detection(s), %d result(s)", frame_w, frame_h, len(detections), len(results))
        return results

    def draw_predictions(
        self,
        frame: np.ndarray,
        results: Sequence[AlprResult],
        color: Color = BOX_COLOR,
        thickness: int = 4,
    ) -> np.ndarray:
        """
        Returns a copy of frame with each plate boxed and its text written above it.
        """
        if self.backend is None:
            raise RuntimeError("AlprEngine was built without an image backend; cannot draw")

        out = image_utils.ensure_rgb(frame).copy()
        frame_w, frame_h = image_utils.frame_size(out)

        for result in results:
            box = result.detection.box.clamp(frame_w, frame_h)
            if box.is_empty():
                continue
            out = self.backend.draw_rectangle(out, box, color, thickness)

            if result.ocr is None or not result.ocr.text:
                continue

            label = format_label(result.ocr.text, result.ocr.mean_confidence)
            origin: Tuple[int, int] = (box.x1, box.y1 - TEXT_OFFSET_Y)
            shadow = (origin[0] + SHADOW_OFFSET, origin[1] + SHADOW_OFFSET)
            out = self.backend.draw_text(out, label, shadow, SHADOW_COLOR)
            out = self.backend.draw_text(out, label, origin, TEXT_COLOR)

        return out

    def close(self) -> None:
        for component in (self.detector, self.ocr):
            close = getattr(component, "close", None)
            if close is not None:
                close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def format_results(results: Sequence[AlprResult]) -> str:
    """
    One line per plate, e.g. "ABC1234 (93%)". Plates without text show "---".
    """
    if not results:
        return "No license plates found"

    lines = []
    for res in results:
        plate = res.ocr.text if res.ocr is not None and res.ocr.text else "---"
        conf = f"{res.ocr.mean_confidence:.0%}" if res.ocr is not None and res.ocr.confidence else "0%"
        lines.append(f"{plate} ({conf})")
    return "\n".join(lines)
