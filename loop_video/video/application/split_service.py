"""
Video Split Application Service.

Plans segment windows for a stored video and, for server-side splits,
renders each window in order and packages the parts as a zip.
"""

import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ...core.logging_config import get_performance_logger
from ..domain.errors import InvalidDuration, InvalidPartCount, TranscoderUnavailable
from ..domain.interfaces import Archiver, SegmentProcessor
from ..domain.models import SegmentWindow, VideoRecord
from ..domain.planners import SegmentPlanner
from .video_service import VideoService


@dataclass(frozen=True)
class SplitResult:
    """Output of one server-side split job"""
    video_id: str
    job_dir: Path
    archive_path: Path
    archive_name: str
    windows: Tuple[SegmentWindow, ...]
    part_names: Tuple[str, ...]


class SplitService:
    """Application service for splitting videos into equal parts"""

    def __init__(
        self,
        video_service: VideoService,
        segment_processor: SegmentProcessor,
        archiver: Archiver,
        work_dir: Path,
        min_parts: int = 2,
        max_parts: int = 6,
        segment_planner: Optional[SegmentPlanner] = None
    ):
        self.video_service = video_service
        self.segment_processor = segment_processor
        self.archiver = archiver
        self.work_dir = Path(work_dir)
        self.min_parts = min_parts
        self.max_parts = max_parts
        self.segment_planner = segment_planner or SegmentPlanner()
        self.logger = logging.getLogger(__name__)

    async def plan_segments(self, video_id: str, part_count: int) -> Tuple[VideoRecord, Tuple[SegmentWindow, ...]]:
        """
        Segment windows for a stored video.

        Raises:
            VideoNotFound: If no such video is registered
            InvalidPartCount: If part_count is outside the configured range
            InvalidDuration: If the video's duration is unknown or zero
        """
        self._check_part_count(part_count)
        record = await self.video_service.get_video(video_id)

        duration = await self.video_service.get_duration(record)
        if duration is None:
            raise InvalidDuration(f"Could not determine a usable duration for video {video_id}")

        # Zero-length windows would stall the transcoder
        return record, self.segment_planner.plan(duration, part_count, allow_zero=False)

    async def split_to_archive(self, video_id: str, part_count: int, ping_pong: bool = True) -> SplitResult:
        """Render every window in order and zip the parts"""
        if not self.segment_processor.is_available():
            raise TranscoderUnavailable("Server-side splitting is unavailable: FFmpeg not found")

        record, windows = await self.plan_segments(video_id, part_count)

        job_dir = self.work_dir / f"{video_id}_{uuid.uuid4().hex[:8]}"
        job_dir.mkdir(parents=True, exist_ok=True)
        operation = f"split {video_id} into {part_count} parts"
        performance_logger = get_performance_logger("split")
        performance_logger.start_timer(operation)

        try:
            members: List[Tuple[Path, str]] = []
            # Strictly sequential: each part's steps depend on the previous step's output
            for window in windows:
                part_name = window.part_name(record.stem)
                self.logger.info(f"Rendering {part_name} [{window.start_time:.3f}s, {window.end_time:.3f}s)")
                part_path = await self.segment_processor.process(record.path, window, job_dir / part_name, ping_pong=ping_pong)
                members.append((part_path, part_name))

            archive_name = f"{record.stem}_parts.zip"
            archive_path = await self.archiver.create(job_dir / archive_name, members)

            for part_path, _ in members:
                part_path.unlink(missing_ok=True)

        except Exception:
            self.cleanup_job(job_dir)
            raise
        finally:
            performance_logger.end_timer(operation)

        return SplitResult(
            video_id=video_id,
            job_dir=job_dir,
            archive_path=archive_path,
            archive_name=archive_name,
            windows=windows,
            part_names=tuple(name for _, name in members)
        )

    def cleanup_job(self, job_dir: Path) -> None:
        """Remove a job's scratch directory"""
        shutil.rmtree(job_dir, ignore_errors=True)
        self.logger.debug(f"Removed split job directory {job_dir}")

    def _check_part_count(self, part_count: int) -> None:
        if isinstance(part_count, bool) or not isinstance(part_count, int) or not self.min_parts <= part_count <= self.max_parts:
            raise InvalidPartCount(f"Number of parts must be between {self.min_parts} and {self.max_parts}")
