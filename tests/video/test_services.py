"""Tests for the video application services and local infrastructure."""

import io
import zipfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from loop_video.video.domain.errors import (
    InvalidDuration, InvalidPartCount, SegmentProcessingError,
    TranscoderUnavailable, UploadRejected, VideoFileMissing, VideoNotFound
)
from loop_video.video.domain.models import VideoRecord
from loop_video.video.domain.planners import RangePlanner
from loop_video.video.infrastructure.repositories import InMemoryVideoRepository
from loop_video.video.infrastructure.storage import LocalUploadStorage
from loop_video.video.integration import VideoModule


class BytesUpload:
    """Minimal async reader standing in for an uploaded file"""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


def make_record(video_id: str, tmp_path: Path) -> VideoRecord:
    return VideoRecord(
        video_id=video_id,
        filename=f"{video_id}.mp4",
        original_name="clip.mp4",
        mime_type="video/mp4",
        size_bytes=10,
        uploaded_at=datetime.now(timezone.utc),
        path=tmp_path / f"{video_id}.mp4",
    )


# ---------------------------------------------------------------------------
# InMemoryVideoRepository
# ---------------------------------------------------------------------------

class TestInMemoryVideoRepository:
    @pytest.mark.asyncio
    async def test_add_get_list_delete(self, tmp_path: Path) -> None:
        repo = InMemoryVideoRepository()
        first, second = make_record("a", tmp_path), make_record("b", tmp_path)

        await repo.add(first)
        await repo.add(second)

        assert await repo.get_by_id("a") is first
        assert [r.video_id for r in await repo.list_all()] == ["a", "b"]

        assert await repo.delete("a") is first
        assert await repo.get_by_id("a") is None
        assert await repo.delete("a") is None
        assert [r.video_id for r in await repo.list_all()] == ["b"]

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, tmp_path: Path) -> None:
        repo = InMemoryVideoRepository()
        await repo.add(make_record("a", tmp_path))
        with pytest.raises(ValueError):
            await repo.add(make_record("a", tmp_path))


# ---------------------------------------------------------------------------
# LocalUploadStorage
# ---------------------------------------------------------------------------

class TestLocalUploadStorage:
    @pytest.mark.asyncio
    async def test_save_keeps_extension_and_size(self, tmp_path: Path) -> None:
        storage = LocalUploadStorage(tmp_path, max_file_size_bytes=1024, chunk_size=7)
        filename, path, size = await storage.save(BytesUpload(b"x" * 100), "holiday.webm")

        assert filename.endswith(".webm")
        assert path == tmp_path / filename
        assert size == 100
        assert path.read_bytes() == b"x" * 100

    @pytest.mark.asyncio
    async def test_oversized_upload_removed(self, tmp_path: Path) -> None:
        storage = LocalUploadStorage(tmp_path, max_file_size_bytes=10, chunk_size=4)
        with pytest.raises(UploadRejected) as exc_info:
            await storage.save(BytesUpload(b"x" * 11), "big.mp4")

        assert exc_info.value.error_code == "FILE_TOO_LARGE"
        assert exc_info.value.status_code == 413
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_empty_upload_removed(self, tmp_path: Path) -> None:
        storage = LocalUploadStorage(tmp_path, max_file_size_bytes=10)
        with pytest.raises(UploadRejected) as exc_info:
            await storage.save(BytesUpload(b""), "empty.mp4")

        assert exc_info.value.error_code == "EMPTY_FILE"
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_iter_range_yields_exact_window(self, tmp_path: Path) -> None:
        data = bytes(range(256)) * 8
        source = tmp_path / "source.bin"
        source.write_bytes(data)
        storage = LocalUploadStorage(tmp_path, max_file_size_bytes=len(data), chunk_size=100)

        plan = RangePlanner().plan(len(data), "bytes=250-1249")
        chunks = [chunk async for chunk in storage.iter_range(source, plan)]

        assert b"".join(chunks) == data[250:1250]
        assert max(len(chunk) for chunk in chunks) <= 100

    @pytest.mark.asyncio
    async def test_iter_range_rejects_unsatisfiable_plan(self, tmp_path: Path) -> None:
        storage = LocalUploadStorage(tmp_path, max_file_size_bytes=10)
        plan = RangePlanner().plan(10, "bytes=50-")
        with pytest.raises(ValueError):
            async for _ in storage.iter_range(tmp_path / "missing", plan):
                pass

    @pytest.mark.asyncio
    async def test_delete_missing_file(self, tmp_path: Path) -> None:
        storage = LocalUploadStorage(tmp_path, max_file_size_bytes=10)
        assert await storage.delete(tmp_path / "nope.mp4") is False


# ---------------------------------------------------------------------------
# VideoService / StreamingService
# ---------------------------------------------------------------------------

class TestVideoService:
    @pytest.mark.asyncio
    async def test_upload_registers_record(self, video_module: VideoModule) -> None:
        record = await video_module.video_service.upload_video(BytesUpload(b"abc"), "clip.mp4", "video/mp4")

        assert record.size_bytes == 3
        assert record.original_name == "clip.mp4"
        assert record.path.read_bytes() == b"abc"
        assert await video_module.video_service.get_video(record.video_id) is record

    @pytest.mark.asyncio
    async def test_upload_rejects_non_video_types(self, video_module: VideoModule) -> None:
        with pytest.raises(UploadRejected) as exc_info:
            await video_module.video_service.upload_video(BytesUpload(b"abc"), "notes.txt", "text/plain")
        assert exc_info.value.error_code == "INVALID_FILE_TYPE"
        assert await video_module.video_service.list_videos() == []

    @pytest.mark.asyncio
    async def test_delete_removes_file_and_record(self, video_module: VideoModule) -> None:
        service = video_module.video_service
        record = await service.upload_video(BytesUpload(b"abc"), "clip.mp4", "video/mp4")

        await service.delete_video(record.video_id)

        assert not record.path.exists()
        with pytest.raises(VideoNotFound):
            await service.get_video(record.video_id)
        with pytest.raises(VideoNotFound):
            await service.delete_video(record.video_id)

    @pytest.mark.asyncio
    async def test_duration_probed_once(self, video_module: VideoModule, metadata_extractor) -> None:
        service = video_module.video_service
        record = await service.upload_video(BytesUpload(b"abc"), "clip.mp4", "video/mp4")

        assert await service.get_duration(record) == 90.0
        assert await service.get_duration(record) == 90.0
        assert metadata_extractor.calls == [record.path]

    @pytest.mark.asyncio
    async def test_stream_plan_uses_current_file_size(self, video_module: VideoModule) -> None:
        record = await video_module.video_service.upload_video(BytesUpload(b"a" * 50), "clip.mp4", "video/mp4")
        record.path.write_bytes(b"a" * 80)

        _, plan = await video_module.streaming_service.prepare_stream(record.video_id, "bytes=60-")
        assert (plan.start, plan.end, plan.total_length) == (60, 79, 80)

    @pytest.mark.asyncio
    async def test_stream_missing_file(self, video_module: VideoModule) -> None:
        record = await video_module.video_service.upload_video(BytesUpload(b"abc"), "clip.mp4", "video/mp4")
        record.path.unlink()

        with pytest.raises(VideoFileMissing):
            await video_module.streaming_service.prepare_stream(record.video_id)


# ---------------------------------------------------------------------------
# SplitService
# ---------------------------------------------------------------------------

class TestSplitService:
    @pytest.mark.asyncio
    async def test_windows_processed_in_order_and_zipped(self, video_module: VideoModule, segment_processor) -> None:
        record = await video_module.video_service.upload_video(BytesUpload(b"abc"), "skate.mp4", "video/mp4")

        result = await video_module.split_service.split_to_archive(record.video_id, 3, ping_pong=True)

        assert [w.index for w in segment_processor.calls] == [0, 1, 2]
        assert [(w.start_time, w.end_time) for w in segment_processor.calls] == [(0, 30), (30, 60), (60, 90)]
        assert segment_processor.ping_pong_flags == [True, True, True]
        assert result.part_names == ("skate_part1.mp4", "skate_part2.mp4", "skate_part3.mp4")
        assert result.archive_name == "skate_parts.zip"

        with zipfile.ZipFile(result.archive_path) as zf:
            assert zf.namelist() == list(result.part_names)
            assert zf.read("skate_part2.mp4") == b"1:30.000-60.000:True"

        # Only the archive is left until the job is cleaned up
        assert list(result.job_dir.iterdir()) == [result.archive_path]
        video_module.split_service.cleanup_job(result.job_dir)
        assert not result.job_dir.exists()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("parts", [1, 7, 0])
    async def test_part_count_outside_configured_range(self, video_module: VideoModule, parts: int) -> None:
        record = await video_module.video_service.upload_video(BytesUpload(b"abc"), "skate.mp4", "video/mp4")
        with pytest.raises(InvalidPartCount):
            await video_module.split_service.plan_segments(record.video_id, parts)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("duration", [None, 0.0])
    async def test_unusable_duration(self, video_module: VideoModule, metadata_extractor, segment_processor, duration) -> None:
        metadata_extractor.duration = duration
        record = await video_module.video_service.upload_video(BytesUpload(b"abc"), "skate.mp4", "video/mp4")

        with pytest.raises(InvalidDuration):
            await video_module.split_service.split_to_archive(record.video_id, 2)
        assert segment_processor.calls == []

    @pytest.mark.asyncio
    async def test_transcoder_unavailable(self, video_module: VideoModule, segment_processor) -> None:
        segment_processor.available = False
        record = await video_module.video_service.upload_video(BytesUpload(b"abc"), "skate.mp4", "video/mp4")

        with pytest.raises(TranscoderUnavailable):
            await video_module.split_service.split_to_archive(record.video_id, 2)

    @pytest.mark.asyncio
    async def test_failed_part_stops_job_and_cleans_up(self, video_module: VideoModule, segment_processor, config) -> None:
        segment_processor.fail_on_index = 1
        record = await video_module.video_service.upload_video(BytesUpload(b"abc"), "skate.mp4", "video/mp4")

        with pytest.raises(SegmentProcessingError):
            await video_module.split_service.split_to_archive(record.video_id, 4)

        assert [w.index for w in segment_processor.calls] == [0, 1]
        assert list(Path(config.storage.work_dir).iterdir()) == []
