"""Worker runtime - orchestrates job execution."""

from importlib.metadata import entry_points
from typing import cast

from loguru import logger

from .common.compute_module import ComputeModule
from .common.job_repository import JobRepository
from .common.job_storage import JobStorage
from .common.schema_job import BaseJobParams, JobRecordUpdate, JobStatus, TaskOutput

TASK_ENTRY_POINT_GROUP = "cl_crop_resize.tasks"

TaskRegistry = dict[str, ComputeModule[BaseJobParams, TaskOutput]]


def get_task_registry() -> TaskRegistry:
    """Load all tasks registered under the cl_crop_resize.tasks entry point group.

    Returns:
        Dict mapping task_type -> ComputeModule instance

    Raises:
        RuntimeError: If a plugin fails to load (missing dependency, etc.)
    """
    registry: TaskRegistry = {}

    for ep in entry_points(group=TASK_ENTRY_POINT_GROUP):
        try:
            task_class = cast(type[ComputeModule[BaseJobParams, TaskOutput]], ep.load())
            task = task_class()
        except Exception as e:
            raise RuntimeError(f"Failed to load task '{ep.name}': {e}") from e
        registry[task.task_type] = task

    return registry


class Worker:
    """Worker runtime that orchestrates job execution.

    - Keeps a task registry (entry points, or injected)
    - Claims jobs from the repository, only of types it can handle
    - Dispatches each job to its ComputeModule and stores the result

    Example:
        worker = Worker(repository, LocalJobStorage("./media"))

        while True:
            if not await worker.run_once():
                await asyncio.sleep(1.0)
    """

    def __init__(
        self,
        repository: JobRepository,
        job_storage: JobStorage,
        task_registry: TaskRegistry | None = None,
    ):
        self.repository: JobRepository = repository
        self.job_storage: JobStorage = job_storage
        self.task_registry: TaskRegistry = (
            task_registry if task_registry is not None else get_task_registry()
        )

    def get_supported_task_types(self) -> list[str]:
        return list(self.task_registry.keys())

    async def run_once(self, task_types: list[str] | None = None) -> bool:
        """Process one job and return.

        Args:
            task_types: Task types to process. None means every registered type.

        Returns:
            True if a job was processed (successfully or not), False if
            there was nothing to do.
        """
        if task_types is None:
            valid_types = self.get_supported_task_types()
        else:
            valid_types = [t for t in task_types if t in self.task_registry]

        if not valid_types:
            return False

        job_record = self.repository.fetch_next_job(valid_types)
        if not job_record:
            return False

        job_id = job_record.job_id
        task = self.task_registry[job_record.task_type]
        logger.info(f"Processing {job_record.task_type} job {job_id}")

        def progress_callback(pct: int) -> None:
            # 100 is reserved for the final update
            _ = self.repository.update_job(job_id, JobRecordUpdate(progress=min(99, pct)))

        try:
            result = await task.execute(job_record, self.job_storage, progress_callback)
        except Exception as e:
            logger.error(f"Job {job_id} crashed: {e}")
            result = JobRecordUpdate(status=JobStatus.error, error_message=str(e), progress=100)

        _ = self.repository.update_job(job_id, result)
        logger.info(f"Job {job_id} finished with status {result.status}")
        return True
