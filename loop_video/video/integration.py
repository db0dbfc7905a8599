"""
Video Module Integration.

Wires the video domain, infrastructure, application and presentation layers
together. This module handles dependency injection and service composition.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter

from ..core.config import Config

# Domain interfaces
from .domain.interfaces import VideoRepository, UploadStorage, MetadataExtractor, SegmentProcessor, Archiver

# Infrastructure implementations
from .infrastructure.repositories import InMemoryVideoRepository
from .infrastructure.storage import LocalUploadStorage
from .infrastructure.converters import FFmpegSegmentProcessor
from .infrastructure.metadata_extractors import OpenCVMetadataExtractor
from .infrastructure.archives import ZipArchiver

# Application services
from .application.video_service import VideoService
from .application.streaming_service import StreamingService
from .application.split_service import SplitService

# Presentation layer
from .presentation.controllers import VideoController, StreamingController, SplitController
from .presentation.routes import create_video_routes


class VideoModule:
    """
    Main video module that provides dependency injection and service composition.

    Any collaborator may be passed in to replace the default implementation,
    which is how tests swap in fakes for FFmpeg and OpenCV.
    """

    def __init__(
        self,
        config: Config,
        video_repository: Optional[VideoRepository] = None,
        upload_storage: Optional[UploadStorage] = None,
        metadata_extractor: Optional[MetadataExtractor] = None,
        segment_processor: Optional[SegmentProcessor] = None,
        archiver: Optional[Archiver] = None
    ):
        self.config = config
        self.logger = logging.getLogger(__name__)

        # Infrastructure layer
        self.video_repository = video_repository or InMemoryVideoRepository()
        self.upload_storage = upload_storage or LocalUploadStorage(
            upload_dir=Path(config.storage.upload_dir),
            max_file_size_bytes=config.storage.max_file_size_bytes
        )
        self.metadata_extractor = metadata_extractor or OpenCVMetadataExtractor()
        self.segment_processor = segment_processor or FFmpegSegmentProcessor(config.split.ffmpeg_binary)
        self.archiver = archiver or ZipArchiver()

        # Application layer
        self.video_service = VideoService(
            video_repository=self.video_repository,
            upload_storage=self.upload_storage,
            metadata_extractor=self.metadata_extractor,
            allowed_mime_types=config.storage.allowed_mime_types
        )
        self.streaming_service = StreamingService(
            video_service=self.video_service,
            upload_storage=self.upload_storage
        )
        self.split_service = SplitService(
            video_service=self.video_service,
            segment_processor=self.segment_processor,
            archiver=self.archiver,
            work_dir=Path(config.storage.work_dir),
            min_parts=config.split.min_parts,
            max_parts=config.split.max_parts
        )

        # Presentation layer
        self.video_controller = VideoController(self.video_service)
        self.streaming_controller = StreamingController(self.streaming_service)
        self.split_controller = SplitController(self.split_service)

        self.logger.info("Video module initialized successfully")

    def get_api_routes(self) -> APIRouter:
        """Get FastAPI routes for video functionality"""
        return create_video_routes(
            video_controller=self.video_controller,
            streaming_controller=self.streaming_controller,
            split_controller=self.split_controller,
            default_ping_pong=self.config.split.ping_pong
        )

    def get_module_status(self) -> dict:
        """Get status information about the video module"""
        return {
            "video_repository": type(self.video_repository).__name__,
            "upload_storage": type(self.upload_storage).__name__,
            "metadata_extractor": type(self.metadata_extractor).__name__,
            "segment_processor": type(self.segment_processor).__name__,
            "splitting_available": self.segment_processor.is_available(),
            "part_range": [self.config.split.min_parts, self.config.split.max_parts],
        }
