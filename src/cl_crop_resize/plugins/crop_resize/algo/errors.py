from typing import override


class CropResizeError(Exception):
    """Base error for the crop/resize pipeline.

    `stage` names the step that failed (resolve, decode, resample, encode).
    """

    def __init__(self, message: str, stage: str = "resize"):
        self.message: str = message
        self.stage: str = stage
        super().__init__(self.message)

    @override
    def __str__(self):
        return f"{self.stage} failed: {self.message}"


class InvalidDimensionsError(CropResizeError, ValueError):
    """Zero or negative width/height on the source or the target."""

    def __init__(self, message: str):
        super().__init__(message, stage="resolve")


class DecodeError(CropResizeError):
    def __init__(self, message: str):
        super().__init__(message, stage="decode")


class ResampleError(CropResizeError):
    def __init__(self, message: str):
        super().__init__(message, stage="resample")


class EncodeError(CropResizeError):
    def __init__(self, message: str):
        super().__init__(message, stage="encode")


class SizeExceededError(CropResizeError):
    """Raised at the job boundary when the resolver reports SizeExceeded."""

    def __init__(self, axis: str, requested: int, available: int):
        self.axis: str = axis
        self.requested: int = requested
        self.available: int = available
        super().__init__(
            f"requested {axis} {requested} exceeds source {axis} {available}",
            stage="resolve",
        )
