"""Center-crop resize of a single image, re-encoded as JPEG."""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from PIL import Image

from ....utils.profiling import timed
from .codec import decode, encode
from .dimensions import ResolvedDims, SizeExceeded, resolve
from .resampler import resample

DEFAULT_QUALITY = 90


@dataclass(frozen=True)
class Rendered:
    """Encoded output together with the geometry that produced it."""

    data: bytes
    dims: ResolvedDims


@timed
def render(
    source: Image.Image,
    target_width: int | None = None,
    target_height: int | None = None,
    quality: int = DEFAULT_QUALITY,
) -> Rendered | SizeExceeded:
    """
    Resolve the target geometry, crop-scale `source` and encode it as JPEG.

    Raises:
        ValueError: If quality is outside [0, 100]
        InvalidDimensionsError: On zero/negative dimensions
        ResampleError: If scaling fails
        EncodeError: If encoding fails
    """
    if not 0 <= quality <= 100:
        raise ValueError(f"Quality must be between 0 and 100, got {quality}")

    resolved = resolve(source.width, source.height, target_width, target_height)
    if isinstance(resolved, SizeExceeded):
        logger.warning(
            f"Requested {resolved.axis} {resolved.requested} exceeds source {resolved.available}"
        )
        return resolved

    with resample(source, resolved.clip, resolved.width, resolved.height) as target:
        return Rendered(data=encode(target, quality), dims=resolved)


def crop_resize(
    source: Image.Image,
    target_width: int | None = None,
    target_height: int | None = None,
    quality: int = DEFAULT_QUALITY,
) -> bytes | SizeExceeded:
    """
    Crop `source` around its center to the target aspect ratio, scale it to
    the target size and encode the result as JPEG.

    - Neither dimension given: the full frame is re-encoded.
    - One dimension given: the other follows the source aspect ratio.
    - Both given: the source is center-cropped to the target aspect ratio.

    Args:
        source: Decoded source image (read only)
        target_width: Requested width, or None
        target_height: Requested height, or None
        quality: JPEG quality (0-100)

    Returns:
        Encoded JPEG bytes, or SizeExceeded when a requested dimension is
        larger than the source (nothing is resampled or encoded)

    Raises:
        ValueError: If quality is outside [0, 100]
        InvalidDimensionsError: On zero/negative dimensions
        ResampleError: If scaling fails
        EncodeError: If encoding fails
    """
    result = render(source, target_width, target_height, quality)
    if isinstance(result, SizeExceeded):
        return result
    return result.data


def crop_resize_bytes(
    data: bytes,
    target_width: int | None = None,
    target_height: int | None = None,
    quality: int = DEFAULT_QUALITY,
) -> bytes | SizeExceeded:
    """Decode `data` and run crop_resize on it. The decoded source is always released."""
    with decode(data) as source:
        return crop_resize(source, target_width, target_height, quality)


def crop_resize_file(
    *,
    input_path: str | Path,
    output_path: str | Path,
    width: int | None = None,
    height: int | None = None,
    quality: int = DEFAULT_QUALITY,
) -> ResolvedDims | SizeExceeded:
    """
    Crop-resize a single image file and write the JPEG output.

    Framework-agnostic, single-image operation.

    Args:
        input_path: Path to input image
        output_path: Path to output image
        width: Target width, or None to derive it
        height: Target height, or None to derive it
        quality: JPEG quality (0-100)

    Returns:
        The geometry the output was produced with, or SizeExceeded (no file
        is written)

    Raises:
        FileNotFoundError: If the input file or the output directory does not exist
        DecodeError: If the input is not a readable image
        ResampleError: If scaling fails
        EncodeError: If encoding fails
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    if not input_path.is_file():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    if not output_path.parent.exists():
        raise FileNotFoundError(f"Output directory does not exist: {output_path.parent}")

    with decode(input_path.read_bytes()) as source:
        result = render(source, width, height, quality)
    if isinstance(result, SizeExceeded):
        return result

    _ = output_path.write_bytes(result.data)
    logger.info(f"Wrote {len(result.data)} bytes to {output_path}")

    return result.dims
