"""Job models: the typed job a task works on and the record it is stored as.

`Job[P, Q]` is what a task sees, with validated params and output models.
`JobRecord` is the same job flattened to JSON values for a repository or the
wire; `JobRecordUpdate` is the partial patch a worker applies to it.
"""

from enum import Enum
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, JsonValue

JsonObject = dict[str, JsonValue]


class JobStatus(str, Enum):
    """Lifecycle of a job: queued -> processing -> completed | error."""

    queued = "queued"
    processing = "processing"
    completed = "completed"
    error = "error"


class BaseJobParams(BaseModel):
    """Parameters shared by every task: one input file, one output file.

    Both paths are relative to the job's storage directory.
    """

    input_path: str = Field(description="path to the input file")
    output_path: str = Field(description="path to the output file")


class TaskOutput(BaseModel):
    """Metadata a task returns; files themselves live in job storage."""


P = TypeVar("P", bound=BaseJobParams)
Q = TypeVar("Q", bound=TaskOutput)


class JobRecord(BaseModel):
    """A job as a repository stores it: params and output as plain JSON."""

    job_id: str
    task_type: str

    params: JsonObject
    output: JsonObject | None = None

    status: JobStatus = JobStatus.queued
    progress: int = Field(0, ge=0, le=100)
    error_message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class JobRecordUpdate(BaseModel):
    """Patch for a JobRecord. Fields left as None are not touched."""

    status: JobStatus | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    output: JsonObject | None = None
    error_message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class JobCreatedResponse(BaseModel):
    """Body returned when an upload has been queued as a job."""

    job_id: str
    status: JobStatus
    task_type: str


class Job(BaseModel, Generic[P, Q]):
    """Runtime, strongly-typed job."""

    job_id: str
    task_type: str

    params: P
    output: Q | None = None

    status: JobStatus = JobStatus.queued
    progress: int = Field(0, ge=0, le=100)
    error_message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)

    def to_record(self) -> JobRecord:
        return JobRecord(
            job_id=self.job_id,
            task_type=self.task_type,
            params=self.params.model_dump(),
            output=self.output.model_dump() if self.output is not None else None,
            status=self.status,
            progress=self.progress,
            error_message=self.error_message,
        )
