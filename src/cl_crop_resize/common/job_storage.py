"""
JobStorage Protocol - job-scoped file storage.

Storage owns the directory layout; callers only pass a job_id and a path
relative to that job. Pillow needs real filenames, so storage can also hand
out absolute paths (resolve_path / allocate_path).
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class JobStorageError(Exception):
    """Base class for storage-related errors."""


class JobDirectoryCreationError(JobStorageError):
    def __init__(self, job_id: str):
        self.job_id: str = job_id
        super().__init__(f"Failed to create storage directory for job '{job_id}'")


class PathTraversalError(JobStorageError, ValueError):
    def __init__(self, job_id: str, relative_path: str):
        self.job_id: str = job_id
        self.relative_path: str = relative_path
        super().__init__(f"Path '{relative_path}' escapes storage of job '{job_id}'")


class SavedJobFile(BaseModel):
    """Metadata of a saved job file."""

    relative_path: str = Field(
        ...,
        description="Relative path of the saved file within the job storage",
    )
    size: int = Field(..., ge=0, description="File size in bytes")

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class AsyncFileLike(Protocol):
    """Minimal async file-like interface (e.g. fastapi.UploadFile)."""

    async def read(self, size: int, /) -> bytes: ...


FileLike = AsyncFileLike | bytes | str | PathLike[str]


@runtime_checkable
class JobStorage(Protocol):
    def create_directory(self, job_id: str) -> None:
        """Create the storage directory of a job (idempotent)."""
        ...

    async def save(
        self,
        job_id: str,
        relative_path: str,
        file: FileLike,
    ) -> SavedJobFile:
        """
        Save a file into job storage.

        `file` may be bytes, an existing filename/Path (copied), or an
        async file-like object such as an upload.
        """
        ...

    def allocate_path(
        self,
        job_id: str,
        relative_path: str,
        *,
        mkdirs: bool = True,
    ) -> Path:
        """Return an absolute path the caller may write to."""
        ...

    def resolve_path(
        self,
        job_id: str,
        relative_path: str | None = None,
    ) -> Path:
        """Resolve a job-relative path to an absolute filesystem path."""
        ...
