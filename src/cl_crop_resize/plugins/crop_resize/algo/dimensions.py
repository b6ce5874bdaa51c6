"""Target dimension and center-crop geometry (pure, no image access)."""

from dataclasses import dataclass

from loguru import logger

from .errors import InvalidDimensionsError, SizeExceededError


@dataclass(frozen=True)
class ClipRectangle:
    """Region of the source image that is scaled into the target."""

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, upper, right, lower), as Pillow expects it."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class ResolvedDims:
    width: int
    height: int
    clip: ClipRectangle


@dataclass(frozen=True)
class SizeExceeded:
    """A requested dimension is larger than the source. No output is produced."""

    axis: str
    requested: int
    available: int

    def to_error(self) -> SizeExceededError:
        return SizeExceededError(self.axis, self.requested, self.available)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _round_div(numerator: int, denominator: int) -> int:
    # nearest integer, halves go up
    return (2 * numerator + denominator) // (2 * denominator)


def _check_positive(name: str, value: int | None) -> None:
    if value is not None and value <= 0:
        raise InvalidDimensionsError(f"{name} must be positive, got {value}")


def resolve(
    source_width: int,
    source_height: int,
    target_width: int | None = None,
    target_height: int | None = None,
) -> ResolvedDims | SizeExceeded:
    """
    Resolve the output size and the source clip for a center-crop resize.

    A missing target dimension is derived from the source aspect ratio.
    When the target is relatively wider than the source the clip keeps the
    full width and trims top and bottom; otherwise it keeps the full height
    and trims left and right.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        target_width: Requested width, or None to derive it
        target_height: Requested height, or None to derive it

    Returns:
        ResolvedDims, or SizeExceeded if a requested dimension is larger
        than the source (images are never upscaled)

    Raises:
        InvalidDimensionsError: If any given dimension is zero or negative,
            or a derived dimension rounds down to zero
    """
    _check_positive("source width", source_width)
    _check_positive("source height", source_height)
    _check_positive("target width", target_width)
    _check_positive("target height", target_height)

    if target_width is not None and target_width > source_width:
        return SizeExceeded("width", target_width, source_width)
    if target_height is not None and target_height > source_height:
        return SizeExceeded("height", target_height, source_height)

    if target_width is None and target_height is None:
        full = ClipRectangle(0, 0, source_width, source_height)
        return ResolvedDims(source_width, source_height, full)

    # source_ratio = source_width / source_height
    if target_width is None:
        assert target_height is not None
        target_width = _round_div(source_width * target_height, source_height)
        _check_positive("derived target width", target_width)
    elif target_height is None:
        target_height = _round_div(target_width * source_height, source_width)
        _check_positive("derived target height", target_height)

    # target_ratio >= source_ratio, cross-multiplied
    if target_width * source_height >= source_width * target_height:
        # clip_height = ceil(source_width / target_ratio)
        clip_height = _ceil_div(source_width * target_height, target_width)
        clip = ClipRectangle(
            0, (source_height - clip_height) // 2, source_width, clip_height
        )
    else:
        # clip_width = ceil(source_height * target_ratio)
        clip_width = _ceil_div(source_height * target_width, target_height)
        clip = ClipRectangle(
            (source_width - clip_width) // 2, 0, clip_width, source_height
        )

    logger.debug(
        f"Resolved {source_width}x{source_height} -> {target_width}x{target_height}, clip={clip}"
    )
    return ResolvedDims(target_width, target_height, clip)
