import logging
import math
from typing import List
import numpy as np
from plate_reader.domain.models import BoundingBox, DetectionResult, LetterboxGeometry

logger = logging.getLogger(__name__)

# [batch_index, x1, y1, x2, y2, class_id, score]
RECORD_SIZE = 7
SCORE_INDEX = 6
PLATE_LABEL = "License Plate"


def decode_detections(
    output: np.ndarray,
    geometry: LetterboxGeometry,
    conf_threshold: float = 0.4,
    label: str = PLATE_LABEL,
) -> List[DetectionResult]:
    """
    Decodes an end-to-end (post-NMS) detector output into boxes on the original frame.

    The output is read as consecutive 7-value records in letterboxed canvas space;
    a trailing partial record is ignored. Records scoring below conf_threshold are
    dropped and the remaining coordinates are truncated toward zero after the
    inverse letterbox mapping. Record order is preserved.
    """
    flat = np.asarray(output, dtype=np.float32).reshape(-1)
    count = flat.size // RECORD_SIZE
    if flat.size % RECORD_SIZE:
        logger.debug("Ignoring %d trailing values of detector output", flat.size % RECORD_SIZE)

    records = flat[:count * RECORD_SIZE].reshape(count, RECORD_SIZE)
    # Scores are float32 model outputs; compare at the same precision
    threshold = np.float32(conf_threshold)
    results = []
    for record in records:
        if record[SCORE_INDEX] < threshold:
            continue
        if not np.isfinite(record[1:5]).all():
            logger.debug("Skipping detection with non-finite coordinates: %s", record[1:5])
            continue

        score = float(record[SCORE_INDEX])
        x1, y1 = geometry.to_original(float(record[1]), float(record[2]))
        x2, y2 = geometry.to_original(float(record[3]), float(record[4]))
        box = BoundingBox(x1=math.trunc(x1), y1=math.trunc(y1), x2=math.trunc(x2), y2=math.trunc(y2))
        results.append(DetectionResult(label=label, confidence=score, box=box))

    return results
