"""JobRepository Protocol - interface for job persistence."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .schema_job import JobRecord, JobRecordUpdate


@runtime_checkable
class JobRepository(Protocol):
    """Protocol for job persistence operations.

    Applications provide the implementation (SQL, in-memory, ...).
    fetch_next_job() must claim atomically so two workers never run the
    same job.
    """

    def add_job(
        self,
        job: JobRecord,
        created_by: str | None = None,
        priority: int | None = None,
    ) -> bool:
        """Persist a new job. Returns False if it could not be stored."""
        ...

    def get_job(self, job_id: str) -> JobRecord | None:
        """Get job by ID."""
        ...

    def update_job(
        self,
        job_id: str,
        updates: JobRecordUpdate,
    ) -> bool:
        """Apply a partial update. Returns False if the job does not exist."""
        ...

    def fetch_next_job(
        self,
        task_types: Sequence[str],
    ) -> JobRecord | None:
        """Atomically find the next queued job of the given types and mark it processing."""
        ...
