"""Crop-resize plugin."""

from .schema import ClipBox, CropResizeOutput, CropResizeParams
from .task import CropResizeTask

__all__ = ["ClipBox", "CropResizeTask", "CropResizeOutput", "CropResizeParams"]
