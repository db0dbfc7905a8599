"""
Video Application Layer.

Contains use cases and application services that orchestrate domain logic
and coordinate between domain and infrastructure layers.
"""

from .video_service import VideoService
from .streaming_service import StreamingService
from .split_service import SplitService, SplitResult

__all__ = [
    "VideoService",
    "StreamingService",
    "SplitService",
    "SplitResult",
]
