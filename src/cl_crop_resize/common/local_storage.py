from __future__ import annotations

import shutil
from os import PathLike
from pathlib import Path
from typing import Final, override

import aiofiles

from .job_storage import (
    FileLike,
    JobDirectoryCreationError,
    JobStorage,
    PathTraversalError,
    SavedJobFile,
)


class LocalJobStorage(JobStorage):
    """
    Local filesystem implementation of JobStorage.

    Layout:
        base_dir/
            <job_id>/
                input/<upload>
                output/<result>.jpg
    """

    _CHUNK_SIZE: Final[int] = 1024 * 1024  # 1 MB

    def __init__(self, base_dir: str | PathLike[str]):
        self._base_dir: Path = Path(base_dir).expanduser().resolve()
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _job_dir(self, job_id: str) -> Path:
        return self._base_dir / job_id

    def _safe_path(self, job_id: str, relative_path: str | None = None) -> Path:
        base = self._job_dir(job_id).resolve()

        path = base if relative_path is None else (base / relative_path)
        resolved = path.resolve()

        if resolved != base and base not in resolved.parents:
            raise PathTraversalError(job_id, relative_path or "")

        return resolved

    @override
    def create_directory(self, job_id: str) -> None:
        try:
            self._job_dir(job_id).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise JobDirectoryCreationError(job_id) from exc

    @override
    async def save(
        self,
        job_id: str,
        relative_path: str,
        file: FileLike,
    ) -> SavedJobFile:
        self.create_directory(job_id)

        dst = self._safe_path(job_id, relative_path)
        dst.parent.mkdir(parents=True, exist_ok=True)

        size = 0

        if isinstance(file, (bytes, bytearray)):
            async with aiofiles.open(dst, "wb") as f:
                _ = await f.write(file)
            size = len(file)

        elif isinstance(file, (str, PathLike)):
            src = Path(file).expanduser().resolve()
            if not src.is_file():
                raise FileNotFoundError(src)

            _ = shutil.copyfile(src, dst)
            size = dst.stat().st_size

        else:
            async with aiofiles.open(dst, "wb") as f:
                while chunk := await file.read(self._CHUNK_SIZE):
                    _ = await f.write(chunk)
                    size += len(chunk)

        return SavedJobFile(relative_path=relative_path, size=size)

    @override
    def allocate_path(
        self,
        job_id: str,
        relative_path: str,
        *,
        mkdirs: bool = True,
    ) -> Path:
        self.create_directory(job_id)
        path = self._safe_path(job_id, relative_path)
        if mkdirs:
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @override
    def resolve_path(
        self,
        job_id: str,
        relative_path: str | None = None,
    ) -> Path:
        return self._safe_path(job_id, relative_path)
