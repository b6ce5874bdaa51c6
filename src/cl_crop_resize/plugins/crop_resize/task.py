"""Crop-resize task implementation."""

from typing import Callable, override

from loguru import logger

from ...common.compute_module import ComputeModule
from ...common.job_storage import JobStorage
from .algo.dimensions import SizeExceeded
from .algo.pipeline import crop_resize_file
from .schema import ClipBox, CropResizeOutput, CropResizeParams


class CropResizeTask(ComputeModule[CropResizeParams, CropResizeOutput]):
    """Compute module that center-crops and scales one image to JPEG."""

    schema: type[CropResizeParams] = CropResizeParams

    @property
    @override
    def task_type(self) -> str:
        return "crop_resize"

    @override
    async def run(
        self,
        job_id: str,
        params: CropResizeParams,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> CropResizeOutput:
        input_path = storage.resolve_path(job_id, params.input_path)
        if not input_path.exists():
            raise FileNotFoundError("Input file not found: " + str(input_path))

        output_path = storage.allocate_path(
            job_id=job_id,
            relative_path=params.output_path,
        )

        resolved = crop_resize_file(
            input_path=input_path,
            output_path=output_path,
            width=params.width,
            height=params.height,
            quality=params.quality,
        )
        if isinstance(resolved, SizeExceeded):
            raise resolved.to_error()

        if progress_callback:
            progress_callback(100)

        logger.info(
            f"Job {job_id}: clip {resolved.clip.width}x{resolved.clip.height}"
            f" -> {resolved.width}x{resolved.height}"
        )
        return CropResizeOutput(
            width=resolved.width,
            height=resolved.height,
            clip=ClipBox.from_clip(resolved.clip),
            size_bytes=output_path.stat().st_size,
        )
