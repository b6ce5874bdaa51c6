"""Test configuration and fixtures for cl_crop_resize.

This module provides:
- Synthetic source images (Pillow / numpy)
- In-memory job repository and local job storage
- Worker and FastAPI TestClient wired to the crop_resize plugin
"""

from collections.abc import Sequence
from pathlib import Path
from typing import override

import numpy as np
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from cl_crop_resize import LocalJobStorage, Worker
from cl_crop_resize.common.job_repository import JobRepository
from cl_crop_resize.common.schema_job import JobRecord, JobRecordUpdate, JobStatus
from cl_crop_resize.plugins.crop_resize.routes import create_router
from cl_crop_resize.plugins.crop_resize.task import CropResizeTask

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


# ============================================================================
# Image Fixtures
# ============================================================================


@pytest.fixture
def synthetic_image(tmp_path: Path) -> Path:
    """800x600 JPEG with a grid and a circle."""
    output_path = tmp_path / "synthetic.jpg"

    img = Image.new("RGB", (800, 600), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)

    for i in range(0, 800, 50):
        draw.line([(i, 0), (i, 600)], fill=(255, 255, 255), width=2)
    for i in range(0, 600, 50):
        draw.line([(0, i), (800, i)], fill=(255, 255, 255), width=2)

    draw.ellipse([300, 200, 500, 400], fill=(200, 100, 100))

    img.save(output_path, "JPEG", quality=85)

    return output_path


@pytest.fixture
def banded_image() -> Image.Image:
    """400x200 RGB: red x<90, green 90<=x<310, blue x>=310.

    Cropping to 203x185 keeps exactly the green band.
    """
    pixels = np.zeros((200, 400, 3), dtype=np.uint8)
    pixels[:, :90] = RED
    pixels[:, 90:310] = GREEN
    pixels[:, 310:] = BLUE
    return Image.fromarray(pixels)


@pytest.fixture
def noise_image() -> Image.Image:
    """320x240 RGB random noise (seeded)."""
    rng = np.random.default_rng(229)
    pixels = rng.integers(0, 256, size=(240, 320, 3), dtype=np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def jpeg_bytes(synthetic_image: Path) -> bytes:
    return synthetic_image.read_bytes()


# ============================================================================
# Job Framework Fixtures
# ============================================================================


class InMemoryJobRepository(JobRepository):
    """In-memory implementation for testing."""

    def __init__(self):
        self._jobs: dict[str, JobRecord] = {}

    @override
    def add_job(
        self,
        job: JobRecord,
        created_by: str | None = None,
        priority: int | None = None,
    ) -> bool:
        self._jobs[job.job_id] = job
        return True

    @override
    def get_job(self, job_id: str) -> JobRecord | None:
        return self._jobs.get(job_id)

    @override
    def update_job(self, job_id: str, updates: JobRecordUpdate) -> bool:
        if job_id not in self._jobs:
            return False
        job = self._jobs[job_id]
        self._jobs[job_id] = job.model_copy(update=updates.model_dump(exclude_none=True))
        return True

    @override
    def fetch_next_job(self, task_types: Sequence[str]) -> JobRecord | None:
        for job_id, job in self._jobs.items():
            if job.status == JobStatus.queued and job.task_type in task_types:
                claimed = job.model_copy(update={"status": JobStatus.processing})
                self._jobs[job_id] = claimed
                return claimed
        return None


@pytest.fixture
def job_repository() -> InMemoryJobRepository:
    return InMemoryJobRepository()


@pytest.fixture
def file_storage(tmp_path: Path) -> LocalJobStorage:
    return LocalJobStorage(base_dir=tmp_path / "file_storage")


@pytest.fixture
def worker(job_repository: InMemoryJobRepository, file_storage: LocalJobStorage) -> Worker:
    task = CropResizeTask()
    return Worker(
        repository=job_repository,
        job_storage=file_storage,
        task_registry={task.task_type: task},
    )


@pytest.fixture
def api_client(job_repository: InMemoryJobRepository, file_storage: LocalJobStorage) -> TestClient:
    """FastAPI TestClient with the crop_resize routes mounted."""
    app = FastAPI()

    def get_current_user():
        return None

    app.include_router(create_router(job_repository, file_storage, get_current_user))

    return TestClient(app)
