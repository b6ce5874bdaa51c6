"""Crop-resize algorithms."""

from .codec import decode, encode, get_encoder_format
from .dimensions import ClipRectangle, ResolvedDims, SizeExceeded, resolve
from .errors import (
    CropResizeError,
    DecodeError,
    EncodeError,
    InvalidDimensionsError,
    ResampleError,
    SizeExceededError,
)
from .pipeline import Rendered, crop_resize, crop_resize_bytes, crop_resize_file, render
from .resampler import resample

__all__ = [
    "ClipRectangle",
    "CropResizeError",
    "DecodeError",
    "EncodeError",
    "InvalidDimensionsError",
    "Rendered",
    "ResampleError",
    "ResolvedDims",
    "SizeExceeded",
    "SizeExceededError",
    "crop_resize",
    "crop_resize_bytes",
    "crop_resize_file",
    "decode",
    "encode",
    "get_encoder_format",
    "render",
    "resample",
    "resolve",
]
