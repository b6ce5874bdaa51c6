"""Crop-resize parameters and output schema."""

from pydantic import BaseModel, Field

from ...common.schema_job import BaseJobParams, TaskOutput
from .algo.codec import OUTPUT_MIME_TYPE
from .algo.dimensions import ClipRectangle
from .algo.pipeline import DEFAULT_QUALITY


class CropResizeParams(BaseJobParams):
    """Parameters for the crop_resize task.

    Attributes:
        input_path: Job-relative path of the source image
        output_path: Job-relative path of the JPEG output
        width: Target width in pixels (None = derived from height and source ratio)
        height: Target height in pixels (None = derived from width and source ratio)
        quality: JPEG quality, 0-100

    Leaving both width and height unset re-encodes the full image.
    """

    width: int | None = Field(default=None, gt=0, description="Target width in pixels")
    height: int | None = Field(default=None, gt=0, description="Target height in pixels")
    quality: int = Field(default=DEFAULT_QUALITY, ge=0, le=100, description="JPEG quality")


class ClipBox(BaseModel):
    """Source region that was scaled into the output."""

    x: int = Field(ge=0)
    y: int = Field(ge=0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @classmethod
    def from_clip(cls, clip: ClipRectangle) -> "ClipBox":
        return cls(x=clip.x, y=clip.y, width=clip.width, height=clip.height)


class CropResizeOutput(TaskOutput):
    width: int = Field(gt=0, description="Output width in pixels")
    height: int = Field(gt=0, description="Output height in pixels")
    clip: ClipBox
    size_bytes: int = Field(ge=0, description="Size of the encoded output")
    mime_type: str = OUTPUT_MIME_TYPE
