"""Crop-and-scale of a source region into the target size."""

from PIL import Image

from .dimensions import ClipRectangle
from .errors import ResampleError

HIGH_QUALITY_FILTERS = (
    Image.Resampling.BICUBIC,
    Image.Resampling.LANCZOS,
    Image.Resampling.HAMMING,
    Image.Resampling.BILINEAR,
)


def _continuous_tone(source: Image.Image) -> Image.Image:
    # Pillow resizes "1" and "P" with nearest-neighbour regardless of filter
    if source.mode == "1":
        return source.convert("L")
    if source.mode == "P":
        return source.convert("RGBA" if "transparency" in source.info else "RGB")
    return source


def resample(
    source: Image.Image,
    clip: ClipRectangle,
    width: int,
    height: int,
    resample_filter: Image.Resampling = Image.Resampling.BICUBIC,
) -> Image.Image:
    """
    Scale the `clip` region of `source` to exactly width x height.

    The source is only read. The caller owns (and closes) the returned image.

    Raises:
        ValueError: If the filter is not a smoothing filter, or the clip lies
            outside the source
        ResampleError: If Pillow fails to convert or scale the pixels
    """
    if resample_filter not in HIGH_QUALITY_FILTERS:
        raise ValueError(f"Resample filter {resample_filter!r} is not high quality")

    left, upper, right, lower = clip.box
    if left < 0 or upper < 0 or right > source.width or lower > source.height:
        raise ValueError(f"Clip {clip} outside source {source.width}x{source.height}")

    try:
        prepared = _continuous_tone(source)
    except (OSError, ValueError) as exc:
        raise ResampleError(f"cannot convert mode {source.mode}: {exc}") from exc

    try:
        return prepared.resize((width, height), resample_filter, box=clip.box)
    except (OSError, ValueError) as exc:
        raise ResampleError(str(exc)) from exc
    finally:
        if prepared is not source:
            prepared.close()
