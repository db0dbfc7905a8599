"""
Video Domain Models.

Pure business entities and value objects for video operations.
These models contain no external dependencies and represent core business concepts.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Optional


class RangeFailure(Enum):
    """Why a range request could not be satisfied"""
    MALFORMED = "malformed"
    UNSATISFIABLE = "unsatisfiable"


@dataclass(frozen=True)
class ByteRangePlan:
    """
    What to serve for one playback request.

    ``end`` is inclusive. A 416 plan carries no byte window: ``start`` and
    ``end`` are None and ``length`` is 0.
    """
    total_length: int
    status: int
    start: Optional[int] = None
    end: Optional[int] = None
    length: int = 0
    is_partial: bool = False
    failure: Optional[RangeFailure] = None

    @property
    def is_satisfiable(self) -> bool:
        return self.status != 416

    @property
    def content_range(self) -> str:
        """Content-Range header value"""
        if not self.is_satisfiable:
            return f"bytes */{self.total_length}"
        return f"bytes {self.start}-{self.end}/{self.total_length}"

    def response_headers(self) -> Dict[str, str]:
        """Headers the streaming endpoint must emit for this plan"""
        if not self.is_satisfiable:
            return {"Content-Range": self.content_range}

        headers = {"Content-Length": str(self.length), "Accept-Ranges": "bytes"}
        if self.is_partial:
            headers["Content-Range"] = self.content_range
        return headers


@dataclass(frozen=True)
class SegmentWindow:
    """One ``[start_time, end_time)`` slice of a media timeline, in seconds"""
    index: int
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def part_name(self, stem: str, extension: str = "mp4") -> str:
        """File name for the clip rendered from this window"""
        return f"{stem}_part{self.index + 1}.{extension}"


@dataclass
class VideoRecord:
    """Uploaded video entity"""
    video_id: str
    filename: str
    original_name: str
    mime_type: str
    size_bytes: int
    uploaded_at: datetime
    path: Path
    duration_seconds: Optional[float] = None

    def __post_init__(self):
        if not self.video_id:
            raise ValueError("Video ID cannot be empty")
        if self.size_bytes < 0:
            raise ValueError("File size cannot be negative")

    @property
    def stem(self) -> str:
        """Original file name without its extension"""
        return Path(self.original_name).stem or self.video_id

    @property
    def file_exists(self) -> bool:
        return self.path.is_file()
