"""Decode/encode boundary around Pillow."""

from collections.abc import Mapping
from functools import cache
from io import BytesIO
from types import MappingProxyType

from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, EncodeError

OUTPUT_MIME_TYPE = "image/jpeg"

# Modes the JPEG encoder writes as-is
_JPEG_MODES = ("1", "L", "RGB", "RGBX", "CMYK", "YCbCr")
_GRAYSCALE_MODES = ("LA", "I", "I;16", "F")


@cache
def encoders() -> Mapping[str, str]:
    """Mime type -> Pillow save format, for every format Pillow can write."""
    Image.init()
    return MappingProxyType(
        {mime.lower(): fmt for fmt, mime in Image.MIME.items() if fmt in Image.SAVE}
    )


def get_encoder_format(mime_type: str) -> str | None:
    """Return the Pillow format for a mime type (case-insensitive), or None."""
    return encoders().get(mime_type.lower())


def decode(data: bytes) -> Image.Image:
    """
    Decode an encoded image fully into memory.

    The returned image holds no file handle; the caller closes it.

    Raises:
        DecodeError: If Pillow cannot identify or read the data
    """
    try:
        img = Image.open(BytesIO(data))
    except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
        raise DecodeError(str(exc)) from exc

    try:
        img.load()
    except (OSError, SyntaxError, ValueError) as exc:
        img.close()
        raise DecodeError(str(exc)) from exc

    return img


def _jpeg_compatible(image: Image.Image) -> Image.Image:
    if image.mode in _JPEG_MODES:
        return image
    if image.mode == "La":
        # premultiplied alpha has no direct conversion to L
        with image.convert("LA") as straight:
            return straight.convert("L")
    if image.mode in _GRAYSCALE_MODES:
        return image.convert("L")
    return image.convert("RGB")


def encode(image: Image.Image, quality: int) -> bytes:
    """
    Encode an image as JPEG.

    Args:
        image: Pixel buffer to encode; it is not modified
        quality: JPEG quality, 0 (worst) to 100 (best)

    Returns:
        Encoded bytes

    Raises:
        ValueError: If quality is outside [0, 100]
        EncodeError: If Pillow fails to encode the image
    """
    if not 0 <= quality <= 100:
        raise ValueError(f"Quality must be between 0 and 100, got {quality}")

    fmt = get_encoder_format(OUTPUT_MIME_TYPE)
    if fmt is None:
        raise EncodeError(f"No encoder registered for {OUTPUT_MIME_TYPE}")

    try:
        flattened = _jpeg_compatible(image)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"cannot convert mode {image.mode}: {exc}") from exc

    buffer = BytesIO()
    try:
        flattened.save(buffer, format=fmt, quality=quality)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(str(exc)) from exc
    finally:
        if flattened is not image:
            flattened.close()

    return buffer.getvalue()
