"""cl_crop_resize - center-crop image resizing as a master-worker compute plugin."""

from .common.compute_module import ComputeModule
from .common.job_repository import JobRepository
from .common.job_storage import AsyncFileLike, FileLike, JobStorage, SavedJobFile
from .common.local_storage import LocalJobStorage
from .common.schema_job import (
    BaseJobParams,
    Job,
    JobRecord,
    JobRecordUpdate,
    JobStatus,
    TaskOutput,
)
from .master import create_master_router, get_available_plugins
from .worker import Worker

__version__ = "0.1.0"

__all__ = [
    "Job",
    "BaseJobParams",
    "TaskOutput",
    "JobRecord",
    "JobRecordUpdate",
    "JobStatus",
    "AsyncFileLike",
    "FileLike",
    "SavedJobFile",
    "ComputeModule",
    "JobRepository",
    "JobStorage",
    "LocalJobStorage",
    "__version__",
    "Worker",
    "create_master_router",
    "get_available_plugins",
]
