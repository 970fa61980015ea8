from functools import lru_cache
import io
import logging
from fastapi import APIRouter, UploadFile, File, HTTPException, Depends
from fastapi.responses import StreamingResponse
from plate_reader.adapters.detector.yolo_onnx_adapter import YoloOnnxAdapter
from plate_reader.adapters.image.factory import create_image_backend
from plate_reader.adapters.ocr.onnx_ocr_adapter import OnnxOcrAdapter
from plate_reader.core.config import settings
from plate_reader.core.errors import InvalidInputError, ModelInvocationError
from plate_reader.domain import image_utils
from plate_reader.domain.services import AlprEngine, format_results
from plate_reader.ports.detector_port import PlateDetectorPort
from plate_reader.ports.image_port import ImageBackendPort
from plate_reader.ports.ocr_port import OcrPort

logger = logging.getLogger(__name__)

router = APIRouter()

SUPPORTED_TYPES = ("image/jpeg", "image/png", "image/webp")


# Dependency Injection (Cached)
@lru_cache()
def get_image_backend() -> ImageBackendPort:
    return create_image_backend(settings.image_backend, settings.font_path)


@lru_cache()
def get_detector() -> PlateDetectorPort:
    return YoloOnnxAdapter.from_settings(settings, backend=get_image_backend())


@lru_cache()
def get_plate_ocr() -> OcrPort:
    return OnnxOcrAdapter.from_settings(settings, backend=get_image_backend())


def get_engine(
    detector: PlateDetectorPort = Depends(get_detector),
    ocr_service: OcrPort = Depends(get_plate_ocr),
    backend: ImageBackendPort = Depends(get_image_backend),
) -> AlprEngine:
    return AlprEngine(detector, ocr_service, backend)


def release_models() -> None:
    """Closes cached models; called on application shutdown."""
    for factory in (get_detector, get_plate_ocr):
        if factory.cache_info().currsize:
            factory().close()
        factory.cache_clear()


async def _read_frame(file: UploadFile):
    if file.content_type not in SUPPORTED_TYPES:
        raise HTTPException(status_code=415, detail="Only JPG/PNG/WEBP supported")

    data = await file.read()
    try:
        return image_utils.decode_image(data)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _run(fn, *args):
    try:
        return fn(*args)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ModelInvocationError as exc:
        logger.error("Model invocation failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc))


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/detect", response_model=dict)
async def detect(
    file: UploadFile = File(...),
    detector: PlateDetectorPort = Depends(get_detector)
):
    frame = await _read_frame(file)
    detections = _run(detector.predict, frame)
    return {
        "fileName": file.filename,
        "detections": [d.model_dump() for d in detections],
    }


@router.post("/ocr", response_model=dict)
async def ocr(
    file: UploadFile = File(...),
    engine: AlprEngine = Depends(get_engine)
):
    frame = await _read_frame(file)
    results = _run(engine.predict, frame)
    return {
        "fileName": file.filename,
        "results": [r.model_dump() for r in results],
        "summary": format_results(results),
    }


@router.post("/annotate")
async def annotate(
    file: UploadFile = File(...),
    engine: AlprEngine = Depends(get_engine)
):
    frame = await _read_frame(file)
    results = _run(engine.predict, frame)
    annotated = engine.draw_predictions(frame, results)

    return StreamingResponse(
        io.BytesIO(image_utils.encode_jpeg(annotated)),
        media_type="image/jpeg",
        headers={"Content-Disposition": "attachment; filename=annotated.jpg"}
    )
