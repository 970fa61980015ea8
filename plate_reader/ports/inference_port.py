from typing import Protocol, Sequence, Union
import numpy as np


class InferencePort(Protocol):
    """A loaded model: one named input in, first declared output back (flattened)."""

    input_name: str
    input_shape: Sequence[Union[int, str, None]]

    def run(self, tensor: np.ndarray) -> np.ndarray:
        ...

    def close(self) -> None:
        ...
