"""
Video Repository Implementations.

In-memory implementation of the video repository interface. Records live
for the lifetime of the process only.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..domain.interfaces import VideoRepository
from ..domain.models import VideoRecord


class InMemoryVideoRepository(VideoRepository):
    """Dictionary-backed repository, insertion ordered"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._records: Dict[str, VideoRecord] = {}
        self._lock = asyncio.Lock()

    async def get_by_id(self, video_id: str) -> Optional[VideoRecord]:
        async with self._lock:
            return self._records.get(video_id)

    async def add(self, record: VideoRecord) -> None:
        async with self._lock:
            if record.video_id in self._records:
                raise ValueError(f"Video {record.video_id} already exists")
            self._records[record.video_id] = record
        self.logger.debug(f"Stored record for {record.video_id}")

    async def delete(self, video_id: str) -> Optional[VideoRecord]:
        async with self._lock:
            record = self._records.pop(video_id, None)
        if record:
            self.logger.debug(f"Removed record for {video_id}")
        return record

    async def list_all(self) -> List[VideoRecord]:
        async with self._lock:
            return list(self._records.values())
