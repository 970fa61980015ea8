from typing import List, Optional
import numpy as np
from plate_reader.adapters.image.factory import create_image_backend
from plate_reader.adapters.inference.onnx_session import OnnxModel
from plate_reader.core.config import Settings, settings as default_settings
from plate_reader.domain.detection import PLATE_LABEL, decode_detections
from plate_reader.domain.letterbox import DEFAULT_TARGET_SIZE, letterbox
from plate_reader.domain.models import DetectionResult
from plate_reader.ports.detector_port import PlateDetectorPort
from plate_reader.ports.image_port import ImageBackendPort
from plate_reader.ports.inference_port import InferencePort


class YoloOnnxAdapter(PlateDetectorPort):
    """
    End-to-end YOLO plate detector (NMS baked into the model).
    """
    def __init__(
        self,
        session: InferencePort,
        conf_threshold: float = 0.4,
        img_size: int = DEFAULT_TARGET_SIZE,
        label: str = PLATE_LABEL,
        backend: Optional[ImageBackendPort] = None,
    ):
        self.session = session
        self.conf_threshold = conf_threshold
        self.img_size = img_size
        self.label = label
        self.backend = backend or create_image_backend("opencv")

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None, backend: Optional[ImageBackendPort] = None):
        cfg = cfg or default_settings
        backend = backend or create_image_backend(cfg.image_backend, cfg.font_path)
        session = OnnxModel(cfg.detector_model_path, providers=cfg.onnx_providers)
        return cls(session, conf_threshold=cfg.conf, img_size=cfg.img_size, backend=backend)

    def predict(self, frame: np.ndarray) -> List[DetectionResult]:
        tensor, geometry = letterbox(frame, self.backend, self.img_size)
        output = self.session.run(tensor)
        return decode_detections(output, geometry, self.conf_threshold, self.label)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
