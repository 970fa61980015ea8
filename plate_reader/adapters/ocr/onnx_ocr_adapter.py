from typing import Optional
import numpy as np
from plate_reader.adapters.image.factory import create_image_backend
from plate_reader.adapters.inference.onnx_session import OnnxModel
from plate_reader.core.config import Settings, settings as default_settings
from plate_reader.domain.models import OcrResult
from plate_reader.domain.plate_transform import PlateTransform, make_plate_transform
from plate_reader.domain.slot_decoder import DEFAULT_ALPHABET, PAD_CHAR, decode_slots, validate_alphabet
from plate_reader.ports.image_port import ImageBackendPort
from plate_reader.ports.inference_port import InferencePort
from plate_reader.ports.ocr_port import OcrPort


class OnnxOcrAdapter(OcrPort):
    """
    Fixed-slot plate recognizer (fast-plate-ocr style ONNX models).

    The model scores every alphabet symbol for each of max_slots character
    positions; the padding symbol marks unused slots.
    """
    def __init__(
        self,
        session: InferencePort,
        transform: PlateTransform,
        alphabet: str = DEFAULT_ALPHABET,
        max_slots: int = 8,
        pad_char: str = PAD_CHAR,
    ):
        if max_slots < 1:
            raise ValueError(f"max_slots must be at least 1, got {max_slots}")
        self.session = session
        self.transform = transform
        self.alphabet = validate_alphabet(alphabet)
        self.max_slots = max_slots
        self.pad_char = pad_char

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None, backend: Optional[ImageBackendPort] = None):
        cfg = cfg or default_settings
        transform = make_plate_transform(
            cfg.ocr_layout,
            backend or create_image_backend(cfg.image_backend, cfg.font_path),
            width=cfg.ocr_width,
            height=cfg.ocr_height
        )
        alphabet = validate_alphabet(cfg.ocr_alphabet)
        session = OnnxModel(cfg.ocr_model_path, providers=cfg.onnx_providers)
        return cls(session, transform, alphabet=alphabet, max_slots=cfg.ocr_max_slots)

    def predict(self, plate: np.ndarray) -> Optional[OcrResult]:
        tensor = self.transform(plate)
        output = self.session.run(tensor)
        return decode_slots(output, self.alphabet, self.max_slots, self.pad_char)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
