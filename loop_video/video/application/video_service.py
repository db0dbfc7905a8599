"""
Video Application Service.

Orchestrates upload, lookup, listing and deletion of videos.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..domain.errors import UploadRejected, VideoNotFound
from ..domain.interfaces import AsyncReadable, MetadataExtractor, UploadStorage, VideoRepository
from ..domain.models import VideoRecord


class VideoService:
    """Application service for video management"""

    def __init__(
        self,
        video_repository: VideoRepository,
        upload_storage: UploadStorage,
        metadata_extractor: MetadataExtractor,
        allowed_mime_types: Iterable[str]
    ):
        self.video_repository = video_repository
        self.upload_storage = upload_storage
        self.metadata_extractor = metadata_extractor
        self.allowed_mime_types = list(allowed_mime_types)
        self.logger = logging.getLogger(__name__)

    async def upload_video(self, source: AsyncReadable, original_name: str, mime_type: Optional[str]) -> VideoRecord:
        """Validate, store and register an uploaded video"""
        if mime_type not in self.allowed_mime_types:
            raise UploadRejected(
                f"Invalid file type. Only video files are allowed: {', '.join(self.allowed_mime_types)}",
                error_code="INVALID_FILE_TYPE"
            )

        filename, path, size = await self.upload_storage.save(source, original_name)

        record = VideoRecord(
            video_id=str(uuid.uuid4()),
            filename=filename,
            original_name=original_name,
            mime_type=mime_type,
            size_bytes=size,
            uploaded_at=datetime.now(timezone.utc),
            path=path
        )

        try:
            await self.video_repository.add(record)
        except ValueError:
            await self.upload_storage.delete(path)
            raise

        self.logger.info(f"Uploaded video {record.video_id} ({original_name}, {size} bytes)")
        return record

    async def get_video(self, video_id: str) -> VideoRecord:
        """Get video record by ID, raising VideoNotFound"""
        record = await self.video_repository.get_by_id(video_id)
        if not record:
            raise VideoNotFound(video_id)
        return record

    async def list_videos(self) -> List[VideoRecord]:
        return await self.video_repository.list_all()

    async def delete_video(self, video_id: str) -> VideoRecord:
        """Remove the record and its file from disk"""
        record = await self.video_repository.delete(video_id)
        if not record:
            raise VideoNotFound(video_id)

        if not await self.upload_storage.delete(record.path):
            self.logger.warning(f"File for video {video_id} was already gone: {record.path}")

        self.logger.info(f"Deleted video {video_id}")
        return record

    async def get_duration(self, record: VideoRecord) -> Optional[float]:
        """Duration in seconds, probed once and remembered on the record"""
        if record.duration_seconds is None:
            record.duration_seconds = await self.metadata_extractor.get_duration(record.path)
            if record.duration_seconds is not None:
                self.logger.debug(f"Probed duration for {record.video_id}: {record.duration_seconds:.3f}s")
        return record.duration_seconds
