import numpy as np
import pytest

from plate_reader.adapters.image.opencv_backend import OpenCvImageBackend
from plate_reader.adapters.image.pillow_backend import PillowImageBackend
from plate_reader.core.errors import ModelInvocationError


class FakeSession:
    """Stands in for an ONNX model: records inputs, replays a fixed output."""

    def __init__(self, output=None, error=None, input_name="images", input_shape=None):
        self.output = np.asarray(output if output is not None else [], dtype=np.float32)
        self.error = error
        self.input_name = input_name
        self.input_shape = input_shape or []
        self.calls = []
        self.closed = False

    def run(self, tensor):
        if self.closed:
            raise ModelInvocationError("closed")
        self.calls.append(tensor)
        if self.error is not None:
            raise self.error
        return self.output.reshape(-1)

    def close(self):
        self.closed = True


def one_hot_scores(text, alphabet, slots, high=0.9, low=0.01):
    """Recognizer output that decodes to `text` padded with the last alphabet symbol."""
    scores = np.full((slots, len(alphabet)), low, dtype=np.float32)
    padded = text + alphabet[-1] * (slots - len(text))
    for slot, char in enumerate(padded):
        scores[slot, alphabet.index(char)] = high
    return scores.reshape(-1)


@pytest.fixture
def opencv_backend():
    return OpenCvImageBackend()


@pytest.fixture(params=["opencv", "pillow"])
def backend(request):
    if request.param == "opencv":
        return OpenCvImageBackend()
    return PillowImageBackend()


@pytest.fixture
def frame():
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(120, 200, 3), dtype=np.uint8)
