from typing import Optional
from plate_reader.ports.image_port import ImageBackendPort


def create_image_backend(name: str = "opencv", font_path: Optional[str] = None) -> ImageBackendPort:
    key = (name or "").strip().lower()
    if key in ("opencv", "cv2"):
        from plate_reader.adapters.image.opencv_backend import OpenCvImageBackend
        return OpenCvImageBackend()
    if key in ("pillow", "pil"):
        from plate_reader.adapters.image.pillow_backend import PillowImageBackend
        return PillowImageBackend(font_path=font_path)
    raise ValueError(f"Unknown image backend: {name!r} (expected 'opencv' or 'pillow')")
