"""
Video Infrastructure Layer.

Contains implementations of domain interfaces using external dependencies
like file systems, FFmpeg, OpenCV, etc.
"""

from .repositories import InMemoryVideoRepository
from .storage import LocalUploadStorage
from .converters import FFmpegSegmentProcessor
from .metadata_extractors import OpenCVMetadataExtractor
from .archives import ZipArchiver

__all__ = [
    "InMemoryVideoRepository",
    "LocalUploadStorage",
    "FFmpegSegmentProcessor",
    "OpenCVMetadataExtractor",
    "ZipArchiver",
]
