from pydantic import BaseModel
from typing import List, Optional
import os


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


class Settings(BaseModel):
    detector_model_path: str = os.getenv("DETECTOR_MODEL_PATH", "models/yolo.onnx")
    ocr_model_path: str = os.getenv("OCR_MODEL_PATH", "models/ocr.onnx")

    # Detector
    conf: float = float(os.getenv("CONF", "0.4"))
    img_size: int = int(os.getenv("IMG_SIZE", "384"))

    # Recognizer
    ocr_alphabet: str = os.getenv("OCR_ALPHABET", "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_")
    ocr_layout: str = os.getenv("OCR_LAYOUT", "grayscale")
    # None -> default size of the selected layout
    ocr_height: Optional[int] = _optional_int("OCR_HEIGHT")
    ocr_width: Optional[int] = _optional_int("OCR_WIDTH")
    ocr_max_slots: int = int(os.getenv("OCR_MAX_SLOTS", "8"))

    image_backend: str = os.getenv("IMAGE_BACKEND", "opencv")
    onnx_providers: List[str] = [
        p.strip()
        for p in os.getenv("ONNX_PROVIDERS", "CPUExecutionProvider").split(",")
        if p.strip()
    ]
    font_path: Optional[str] = os.getenv("FONT_PATH") or None

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
