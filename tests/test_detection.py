import numpy as np
import pytest

from plate_reader.domain.detection import PLATE_LABEL, decode_detections
from plate_reader.domain.models import BoundingBox, LetterboxGeometry

IDENTITY = LetterboxGeometry(ratio=1.0, pad_x=0.0, pad_y=0.0)


def _record(x1, y1, x2, y2, score, class_id=0.0):
    return [0.0, x1, y1, x2, y2, class_id, score]


class TestDecodeDetections:
    def test_threshold_filters_low_scores(self):
        buffer = np.array(
            _record(10, 10, 50, 30, 0.1)
            + _record(60, 10, 90, 30, 0.5)
            + _record(100, 10, 150, 30, 0.9),
            dtype=np.float32,
        )
        results = decode_detections(buffer, IDENTITY, conf_threshold=0.4)
        assert len(results) == 2
        assert [r.confidence for r in results] == pytest.approx([0.5, 0.9])

    def test_score_equal_to_threshold_is_kept(self):
        buffer = np.array(_record(1, 1, 2, 2, 0.5), dtype=np.float32)
        assert len(decode_detections(buffer, IDENTITY, conf_threshold=0.5)) == 1

    def test_maps_back_to_original_frame(self):
        # 768x384 frame letterboxed to 384: ratio 0.5, 96 px vertical padding
        geometry = LetterboxGeometry(ratio=0.5, pad_x=0.0, pad_y=96.0)
        buffer = np.array(_record(10, 106, 50, 146, 0.8), dtype=np.float32)
        [result] = decode_detections(buffer, geometry)
        assert result.box == BoundingBox(x1=20, y1=20, x2=100, y2=100)
        assert result.label == PLATE_LABEL

    def test_coordinates_are_truncated_not_rounded(self):
        buffer = np.array(_record(10.9, 20.7, 30.99, 40.5, 0.9), dtype=np.float32)
        [result] = decode_detections(buffer, IDENTITY)
        assert result.box == BoundingBox(x1=10, y1=20, x2=30, y2=40)

    def test_negative_coordinates_truncate_toward_zero(self):
        geometry = LetterboxGeometry(ratio=1.0, pad_x=5.0, pad_y=5.0)
        buffer = np.array(_record(3.5, 2.5, 20, 20, 0.9), dtype=np.float32)
        [result] = decode_detections(buffer, geometry)
        assert result.box.x1 == -1
        assert result.box.y1 == -2

    def test_trailing_partial_record_ignored(self):
        buffer = np.array(_record(1, 1, 5, 5, 0.9) + [0.0, 1.0, 2.0], dtype=np.float32)
        assert len(decode_detections(buffer, IDENTITY)) == 1

    def test_record_order_preserved(self):
        buffer = np.array(
            _record(100, 0, 120, 10, 0.6) + _record(0, 0, 20, 10, 0.95),
            dtype=np.float32,
        )
        results = decode_detections(buffer, IDENTITY)
        assert [r.box.x1 for r in results] == [100, 0]

    def test_no_deduplication(self):
        buffer = np.array(_record(0, 0, 20, 10, 0.9) * 2, dtype=np.float32)
        assert len(decode_detections(buffer, IDENTITY)) == 2

    def test_empty_and_nested_buffers(self):
        assert decode_detections(np.zeros(0, dtype=np.float32), IDENTITY) == []
        nested = np.array([[_record(0, 0, 20, 10, 0.9)]], dtype=np.float32)
        assert len(decode_detections(nested, IDENTITY)) == 1

    def test_custom_label(self):
        buffer = np.array(_record(0, 0, 20, 10, 0.9), dtype=np.float32)
        [result] = decode_detections(buffer, IDENTITY, label="plate")
        assert result.label == "plate"

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_coordinates_skipped(self, bad):
        buffer = np.array(_record(bad, 1, 5, 5, 0.9) + _record(0, 0, 20, 10, 0.9), dtype=np.float32)
        [result] = decode_detections(buffer, IDENTITY)
        assert result.box == BoundingBox(x1=0, y1=0, x2=20, y2=10)

    def test_threshold_compared_at_model_precision(self):
        buffer = np.array(_record(0, 0, 20, 10, 0.7), dtype=np.float32)
        assert len(decode_detections(buffer, IDENTITY, conf_threshold=0.7)) == 1
