"""
Video Metadata Extractors.

Implementations for extracting video metadata using OpenCV.
"""

import asyncio
import logging
import math
from pathlib import Path
from typing import Optional

import cv2

from ..domain.interfaces import MetadataExtractor


class OpenCVMetadataExtractor(MetadataExtractor):
    """OpenCV-based metadata extractor"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    async def get_duration(self, file_path: Path) -> Optional[float]:
        """Extract duration from video file using OpenCV"""
        try:
            # Run OpenCV operations in thread pool to avoid blocking
            return await asyncio.get_event_loop().run_in_executor(
                None, self._duration_sync, file_path
            )
        except Exception as e:
            self.logger.error(f"Error extracting duration from {file_path}: {e}")
            return None

    def _duration_sync(self, file_path: Path) -> Optional[float]:
        """Synchronous duration probe"""
        cap = None
        try:
            cap = cv2.VideoCapture(str(file_path))

            if not cap.isOpened():
                self.logger.warning(f"Could not open video file: {file_path}")
                return None

            fps = cap.get(cv2.CAP_PROP_FPS)
            frame_count = cap.get(cv2.CAP_PROP_FRAME_COUNT)

            # WebM from browser recorders often reports no frame count
            if fps <= 0 or frame_count <= 0:
                return None

            duration_seconds = frame_count / fps
            return duration_seconds if math.isfinite(duration_seconds) else None

        finally:
            if cap is not None:
                cap.release()
