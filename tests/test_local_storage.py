"""Tests for LocalJobStorage."""

from pathlib import Path

import pytest

from cl_crop_resize import LocalJobStorage
from cl_crop_resize.common.job_storage import JobStorage, PathTraversalError


class FakeUpload:
    """Async file-like that hands out its content in small pieces."""

    def __init__(self, content: bytes):
        self._content = content
        self._offset = 0

    async def read(self, size: int, /) -> bytes:
        chunk = self._content[self._offset : self._offset + min(size, 3)]
        self._offset += len(chunk)
        return chunk


@pytest.fixture
def storage(tmp_path: Path) -> LocalJobStorage:
    return LocalJobStorage(tmp_path / "storage")


def test_satisfies_protocol(storage: LocalJobStorage):
    assert isinstance(storage, JobStorage)


async def test_save_bytes(storage: LocalJobStorage):
    saved = await storage.save("job-1", "input/a.bin", b"hello")

    assert saved.model_dump() == {"relative_path": "input/a.bin", "size": 5}
    assert storage.resolve_path("job-1", "input/a.bin").read_bytes() == b"hello"


async def test_save_copies_path(storage: LocalJobStorage, tmp_path: Path):
    src = tmp_path / "source.jpg"
    src.write_bytes(b"\xff\xd8 not really a jpeg")

    saved = await storage.save("job-1", "input/source.jpg", src)

    assert saved.size == src.stat().st_size


async def test_save_missing_path(storage: LocalJobStorage, tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        _ = await storage.save("job-1", "input/x.jpg", tmp_path / "missing.jpg")


async def test_save_async_file_like(storage: LocalJobStorage):
    saved = await storage.save("job-1", "input/upload.bin", FakeUpload(b"0123456789"))

    assert saved.size == 10
    assert storage.resolve_path("job-1", "input/upload.bin").read_bytes() == b"0123456789"


def test_allocate_path_creates_parents(storage: LocalJobStorage):
    path = storage.allocate_path("job-2", "output/deep/result.jpg")

    assert path.parent.is_dir()
    assert path == storage.base_dir / "job-2" / "output" / "deep" / "result.jpg"


def test_allocate_path_without_mkdirs(storage: LocalJobStorage):
    path = storage.allocate_path("job-2", "output/result.jpg", mkdirs=False)

    assert not path.parent.exists()


def test_resolve_job_root(storage: LocalJobStorage):
    assert storage.resolve_path("job-3") == storage.base_dir / "job-3"


@pytest.mark.parametrize("relative_path", ["../other/file.jpg", "input/../../escape.jpg"])
def test_path_traversal_rejected(storage: LocalJobStorage, relative_path: str):
    with pytest.raises(PathTraversalError):
        _ = storage.resolve_path("job-1", relative_path)
