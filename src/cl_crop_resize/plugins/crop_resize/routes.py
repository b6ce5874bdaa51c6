"""Crop-resize route factory."""

from pathlib import Path
from typing import Annotated, Callable

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ...common.job_creator import create_job_from_upload
from ...common.job_repository import JobRepository
from ...common.job_storage import JobStorage
from ...common.schema_job import JobCreatedResponse
from ...common.user import UserLike
from .algo.pipeline import DEFAULT_QUALITY
from .schema import CropResizeOutput, CropResizeParams


def create_router(
    repository: JobRepository,
    file_storage: JobStorage,
    get_current_user: Callable[[], UserLike | None],
) -> APIRouter:
    router = APIRouter()

    @router.post("/jobs/crop_resize", response_model=JobCreatedResponse)
    async def create_crop_resize_job(
        file: Annotated[UploadFile, File(description="Image file to crop and resize")],
        width: Annotated[int | None, Form(gt=0, description="Target width in pixels")] = None,
        height: Annotated[int | None, Form(gt=0, description="Target height in pixels")] = None,
        quality: Annotated[
            int, Form(ge=0, le=100, description="JPEG quality (0-100)")
        ] = DEFAULT_QUALITY,
        priority: Annotated[int, Form(ge=0, le=10, description="Job priority (0-10)")] = 5,
        user: Annotated[UserLike | None, Depends(get_current_user)] = None,
    ) -> JobCreatedResponse:
        return await create_job_from_upload(
            task_type="crop_resize",
            repository=repository,
            file_storage=file_storage,
            file=file,
            priority=priority,
            user=user,
            output_type=CropResizeOutput,
            params_factory=lambda path: CropResizeParams(
                input_path=path,
                output_path=f"output/resized_{Path(path).stem}.jpg",
                width=width,
                height=height,
                quality=quality,
            ),
        )

    _ = create_crop_resize_job
    return router
