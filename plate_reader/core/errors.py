class AlprError(Exception):
    """Base class for errors raised by the plate reading pipeline."""


class InvalidInputError(AlprError, ValueError):
    """Zero-size image, degenerate crop or malformed buffer."""


class ModelLoadError(AlprError):
    """A model file could not be loaded into the inference runtime."""


class ModelInvocationError(AlprError):
    """The inference runtime failed while running a loaded model."""
