"""ComputeModule - Abstract base class for compute tasks."""

from abc import ABC, abstractmethod
from typing import Callable, Generic

from loguru import logger
from pydantic import ValidationError

from .job_storage import JobStorage
from .schema_job import JobRecord, JobRecordUpdate, JobStatus, P, Q


class ComputeModule(ABC, Generic[P, Q]):
    """
    Stateless, template-method based compute module.

    - Params are validated once in execute() and passed to run()
    - run() persists files through storage and raises on failure
    - Q contains metadata only
    """

    schema: type[P]

    @property
    @abstractmethod
    def task_type(self) -> str: ...

    @abstractmethod
    async def run(
        self,
        job_id: str,
        params: P,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> Q:
        """
        Execute task.

        - May persist data via storage
        - Must return metadata only
        """
        ...

    async def execute(
        self,
        job_record: JobRecord,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> JobRecordUpdate:
        try:
            params = self.schema.model_validate(job_record.params)
        except ValidationError as exc:
            logger.error(f"Invalid params for job {job_record.job_id}: {exc}")
            return JobRecordUpdate(
                status=JobStatus.error,
                error_message=f"Invalid parameters: {exc}",
            )

        try:
            output = await self.run(
                job_record.job_id,
                params,
                storage,
                progress_callback,
            )

            return JobRecordUpdate(
                status=JobStatus.completed,
                output=output.model_dump(),
                progress=100,
            )

        except FileNotFoundError as exc:
            logger.error(f"Job {job_record.job_id}: {exc}")
            return JobRecordUpdate(
                status=JobStatus.error,
                error_message=str(exc),
            )

        except Exception as exc:
            logger.error(f"Job {job_record.job_id} ({self.task_type}) failed: {exc}")
            return JobRecordUpdate(
                status=JobStatus.error,
                error_message=str(exc),
            )
