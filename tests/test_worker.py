"""Tests for the Worker runtime and task discovery."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cl_crop_resize import Worker
from cl_crop_resize.common.schema_job import JobRecord, JobRecordUpdate, JobStatus
from cl_crop_resize.plugins.crop_resize.task import CropResizeTask
from cl_crop_resize.worker import TASK_ENTRY_POINT_GROUP, get_task_registry


def _queued(job_id: str, task_type: str = "crop_resize") -> JobRecord:
    return JobRecord(
        job_id=job_id,
        task_type=task_type,
        params={"input_path": "input/a.jpg", "output_path": "output/a.jpg"},
    )


class TestTaskRegistry:
    def test_loads_entry_points(self) -> None:
        ep = SimpleNamespace(name="crop_resize", load=lambda: CropResizeTask)

        with patch("cl_crop_resize.worker.entry_points", return_value=[ep]) as mock_eps:
            registry = get_task_registry()

        mock_eps.assert_called_once_with(group=TASK_ENTRY_POINT_GROUP)
        assert list(registry) == ["crop_resize"]
        assert isinstance(registry["crop_resize"], CropResizeTask)

    def test_broken_plugin_fails_fast(self) -> None:
        def load():
            raise ImportError("missing dependency")

        ep = SimpleNamespace(name="broken", load=load)

        with patch("cl_crop_resize.worker.entry_points", return_value=[ep]):
            with pytest.raises(RuntimeError, match="Failed to load task 'broken'"):
                _ = get_task_registry()


class TestRunOnce:
    async def test_no_jobs(self, worker: Worker) -> None:
        assert await worker.run_once() is False

    async def test_unsupported_task_types(self, worker: Worker, job_repository) -> None:
        _ = job_repository.add_job(_queued("job-1"))

        assert await worker.run_once(["face_detection"]) is False
        assert job_repository.get_job("job-1").status == JobStatus.queued

    def test_supported_task_types(self, worker: Worker) -> None:
        assert worker.get_supported_task_types() == ["crop_resize"]

    async def test_result_is_stored(self, job_repository, file_storage) -> None:
        task = MagicMock()
        task.execute = AsyncMock(
            return_value=JobRecordUpdate(
                status=JobStatus.completed, progress=100, output={"width": 1}
            )
        )
        worker = Worker(job_repository, file_storage, task_registry={"crop_resize": task})
        _ = job_repository.add_job(_queued("job-1"))

        assert await worker.run_once() is True

        job = job_repository.get_job("job-1")
        assert job.status == JobStatus.completed
        assert job.output == {"width": 1}
        record, storage, _callback = task.execute.call_args.args
        assert record.status == JobStatus.processing
        assert storage is file_storage

    async def test_progress_capped_below_completion(self, job_repository, file_storage) -> None:
        seen: list[int] = []

        async def execute(record, storage, progress_callback):
            progress_callback(100)
            seen.append(job_repository.get_job(record.job_id).progress)
            return JobRecordUpdate(status=JobStatus.completed, progress=100)

        task = MagicMock()
        task.execute = execute
        worker = Worker(job_repository, file_storage, task_registry={"crop_resize": task})
        _ = job_repository.add_job(_queued("job-1"))

        _ = await worker.run_once()

        assert seen == [99]
        assert job_repository.get_job("job-1").progress == 100

    async def test_task_crash_marks_job_error(self, job_repository, file_storage) -> None:
        task = MagicMock()
        task.execute = AsyncMock(side_effect=RuntimeError("boom"))
        worker = Worker(job_repository, file_storage, task_registry={"crop_resize": task})
        _ = job_repository.add_job(_queued("job-1"))

        assert await worker.run_once() is True

        job = job_repository.get_job("job-1")
        assert job.status == JobStatus.error
        assert job.error_message == "boom"
