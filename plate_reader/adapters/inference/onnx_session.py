import logging
from pathlib import Path
from typing import List, Optional, Union
import numpy as np
import onnxruntime as ort
from plate_reader.core.errors import ModelInvocationError, ModelLoadError
from plate_reader.ports.inference_port import InferencePort

logger = logging.getLogger(__name__)


class OnnxModel(InferencePort):
    """
    A loaded ONNX model with one input.

    The input name is discovered from the model, and run() always returns the
    first declared output flattened to float32. The session is dropped on
    close(), so use it as a context manager or close it explicitly.
    """

    def __init__(self, model_path: Union[str, Path], providers: Optional[List[str]] = None):
        self.model_path = str(model_path)
        if not Path(self.model_path).is_file():
            raise ModelLoadError(f"Model file not found: {self.model_path}")

        try:
            self._session = ort.InferenceSession(
                self.model_path,
                providers=providers or ["CPUExecutionProvider"]
            )
        except Exception as exc:
            raise ModelLoadError(f"Failed to load ONNX model from '{self.model_path}': {exc}") from exc

        model_input = self._session.get_inputs()[0]
        self.input_name = model_input.name
        self.input_shape = list(model_input.shape)
        self.output_name = self._session.get_outputs()[0].name

        logger.info(
            "ONNX model loaded from '%s' (input %s %s, output %s)",
            self.model_path, self.input_name, self.input_shape, self.output_name
        )

    @property
    def closed(self) -> bool:
        return self._session is None

    def run(self, tensor: np.ndarray) -> np.ndarray:
        if self._session is None:
            raise ModelInvocationError(f"Model '{self.model_path}' is closed")

        try:
            outputs = self._session.run([self.output_name], {self.input_name: tensor})
        except Exception as exc:
            raise ModelInvocationError(f"Inference failed for '{self.model_path}': {exc}") from exc

        return np.asarray(outputs[0], dtype=np.float32).reshape(-1)

    def close(self) -> None:
        if self._session is not None:
            logger.debug("Releasing ONNX session for '%s'", self.model_path)
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
