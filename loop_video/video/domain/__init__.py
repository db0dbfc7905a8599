"""
Video Domain Layer.

Contains pure business logic and domain models for video operations.
No external dependencies - only Python standard library and domain concepts.
"""

from .models import ByteRangePlan, RangeFailure, SegmentWindow, VideoRecord
from .planners import RangePlanner, SegmentPlanner
from .interfaces import VideoRepository, UploadStorage, MetadataExtractor, SegmentProcessor, Archiver

__all__ = [
    "ByteRangePlan",
    "RangeFailure",
    "SegmentWindow",
    "VideoRecord",
    "RangePlanner",
    "SegmentPlanner",
    "VideoRepository",
    "UploadStorage",
    "MetadataExtractor",
    "SegmentProcessor",
    "Archiver",
]
