from pathlib import PurePath
from typing import Callable
from uuid import uuid4

from fastapi import UploadFile
from loguru import logger

from .job_repository import JobRepository
from .job_storage import JobStorage
from .schema_job import Job, JobCreatedResponse, JobStatus, P, Q
from .user import UserLike


async def create_job_from_upload(
    *,
    task_type: str,
    repository: JobRepository,
    file_storage: JobStorage,
    file: UploadFile,
    params_factory: Callable[[str], P],
    output_type: type[Q],
    priority: int,
    user: UserLike | None,
) -> JobCreatedResponse:
    """Store an uploaded file under a new job and queue the job.

    `params_factory` receives the job-relative input path and builds the
    task parameters.
    """
    _ = output_type

    if not file.filename:
        raise ValueError("Uploaded file has no filename")
    filename = PurePath(file.filename).name

    job_id = str(uuid4())
    file_storage.create_directory(job_id)
    file_info = await file_storage.save(job_id, f"input/{filename}", file)

    job = Job[P, Q](
        job_id=job_id,
        task_type=task_type,
        params=params_factory(file_info.relative_path),
        progress=0,
        status=JobStatus.queued,
    )

    created_by = user.id if user else None
    ok = repository.add_job(
        job.to_record(),
        created_by=created_by,
        priority=priority,
    )

    if not ok:
        raise ValueError("Failed to create job")

    logger.info(f"Queued {task_type} job {job_id} ({file_info.size} bytes uploaded)")
    return JobCreatedResponse(job_id=job_id, status=job.status, task_type=task_type)
