"""
Video Domain Interfaces.

Abstract interfaces that define contracts for video operations.
These interfaces allow dependency inversion - domain logic doesn't depend on infrastructure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import AsyncIterator, List, Optional, Protocol, Sequence, Tuple

from .models import ByteRangePlan, SegmentWindow, VideoRecord


class AsyncReadable(Protocol):
    """Anything with an awaitable ``read`` - e.g. an uploaded multipart file"""

    async def read(self, size: int = -1) -> bytes:
        ...


class VideoRepository(ABC):
    """Abstract repository for uploaded video metadata"""

    @abstractmethod
    async def get_by_id(self, video_id: str) -> Optional[VideoRecord]:
        """Get video record by ID"""
        pass

    @abstractmethod
    async def add(self, record: VideoRecord) -> None:
        """Insert a new video record"""
        pass

    @abstractmethod
    async def delete(self, video_id: str) -> Optional[VideoRecord]:
        """Remove a video record, returning it if it existed"""
        pass

    @abstractmethod
    async def list_all(self) -> List[VideoRecord]:
        """All video records in upload order"""
        pass


class UploadStorage(ABC):
    """Abstract byte storage for uploaded files"""

    @abstractmethod
    async def save(self, source: AsyncReadable, original_name: str) -> Tuple[str, Path, int]:
        """Persist an upload, returning (stored filename, path, size in bytes)"""
        pass

    @abstractmethod
    async def delete(self, path: Path) -> bool:
        """Delete a stored file"""
        pass

    @abstractmethod
    def iter_range(self, path: Path, plan: ByteRangePlan) -> AsyncIterator[bytes]:
        """Yield exactly the bytes described by a satisfiable plan"""
        pass


class MetadataExtractor(ABC):
    """Abstract video metadata extractor"""

    @abstractmethod
    async def get_duration(self, file_path: Path) -> Optional[float]:
        """Duration in seconds, or None when it cannot be determined"""
        pass


class SegmentProcessor(ABC):
    """Renders one segment window of a source video into its own clip"""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying transcoder can run"""
        pass

    @abstractmethod
    async def process(
        self,
        source_path: Path,
        window: SegmentWindow,
        output_path: Path,
        ping_pong: bool = True
    ) -> Path:
        """Render ``window`` (optionally followed by its reverse) to ``output_path``"""
        pass


class Archiver(ABC):
    """Packages rendered parts for download"""

    @abstractmethod
    async def create(self, archive_path: Path, members: Sequence[Tuple[Path, str]]) -> Path:
        """Write (file, archive name) members in order and return the archive path"""
        pass
