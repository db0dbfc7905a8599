"""
Video Streaming Application Service.

Handles playback requests including HTTP range requests for seeking.
"""

import logging
from typing import AsyncIterator, Optional, Tuple

from ..domain.errors import VideoFileMissing
from ..domain.interfaces import UploadStorage
from ..domain.models import ByteRangePlan, VideoRecord
from ..domain.planners import RangePlanner
from .video_service import VideoService


class StreamingService:
    """Application service for video streaming"""

    def __init__(
        self,
        video_service: VideoService,
        upload_storage: UploadStorage,
        range_planner: Optional[RangePlanner] = None
    ):
        self.video_service = video_service
        self.upload_storage = upload_storage
        self.range_planner = range_planner or RangePlanner()
        self.logger = logging.getLogger(__name__)

    async def prepare_stream(self, video_id: str, range_header: Optional[str] = None) -> Tuple[VideoRecord, ByteRangePlan]:
        """
        Look up a video and plan the byte window for one request.

        The file is measured at request time rather than trusting the size
        recorded at upload.

        Raises:
            VideoNotFound: If no such video is registered
            VideoFileMissing: If the file is gone from disk or empty
        """
        record = await self.video_service.get_video(video_id)

        try:
            file_size = record.path.stat().st_size
        except FileNotFoundError:
            raise VideoFileMissing(video_id)

        if file_size <= 0:
            raise VideoFileMissing(video_id)

        plan = self.range_planner.plan(file_size, range_header)

        if not plan.is_satisfiable:
            self.logger.info(f"Range {range_header!r} for {video_id} not satisfiable ({plan.failure.value}), size {file_size}")
        elif plan.is_partial:
            self.logger.debug(f"Serving {video_id} bytes {plan.start}-{plan.end}/{file_size}")

        return record, plan

    def open_stream(self, record: VideoRecord, plan: ByteRangePlan) -> AsyncIterator[bytes]:
        """Byte iterator for a satisfiable plan"""
        return self.upload_storage.iter_range(record.path, plan)
