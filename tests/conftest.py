"""Shared pytest fixtures for the Loop Video test suite.

FFmpeg and OpenCV are replaced by fakes at the infrastructure boundary so
the suite runs without native tools or real media files.
"""

import json
from pathlib import Path
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from loop_video.api.server import create_app
from loop_video.core.config import Config
from loop_video.video.domain.errors import SegmentProcessingError
from loop_video.video.domain.interfaces import MetadataExtractor, SegmentProcessor
from loop_video.video.domain.models import SegmentWindow
from loop_video.video.integration import VideoModule


class FakeMetadataExtractor(MetadataExtractor):
    """Reports the same duration for every file"""

    def __init__(self, duration: Optional[float] = 90.0):
        self.duration = duration
        self.calls: List[Path] = []

    async def get_duration(self, file_path: Path) -> Optional[float]:
        self.calls.append(file_path)
        return self.duration


class FakeSegmentProcessor(SegmentProcessor):
    """Writes a small text payload describing each window instead of video"""

    def __init__(self, available: bool = True, fail_on_index: Optional[int] = None):
        self.available = available
        self.fail_on_index = fail_on_index
        self.calls: List[SegmentWindow] = []
        self.ping_pong_flags: List[bool] = []

    def is_available(self) -> bool:
        return self.available

    async def process(self, source_path: Path, window: SegmentWindow, output_path: Path, ping_pong: bool = True) -> Path:
        self.calls.append(window)
        self.ping_pong_flags.append(ping_pong)
        if window.index == self.fail_on_index:
            raise SegmentProcessingError(f"Failed to process part {window.index + 1}", segment_index=window.index)

        output_path.write_text(f"{window.index}:{window.start_time:.3f}-{window.end_time:.3f}:{ping_pong}")
        return output_path


@pytest.fixture
def config(tmp_path: Path) -> Config:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "storage": {
            "upload_dir": str(tmp_path / "uploads"),
            "work_dir": str(tmp_path / "work"),
            "max_file_size_mb": 1,
        },
        "system": {"log_level": "DEBUG", "log_file": None},
    }))
    return Config(str(config_file))


@pytest.fixture
def metadata_extractor() -> FakeMetadataExtractor:
    return FakeMetadataExtractor()


@pytest.fixture
def segment_processor() -> FakeSegmentProcessor:
    return FakeSegmentProcessor()


@pytest.fixture
def video_module(config: Config, metadata_extractor: FakeMetadataExtractor, segment_processor: FakeSegmentProcessor) -> VideoModule:
    return VideoModule(config, metadata_extractor=metadata_extractor, segment_processor=segment_processor)


@pytest.fixture
def client(config: Config, video_module: VideoModule) -> TestClient:
    return TestClient(create_app(config, video_module))


@pytest.fixture
def video_bytes() -> bytes:
    return bytes(range(256)) * 4 + bytes(range(232))  # 1256 bytes


@pytest.fixture
def uploaded_video(client: TestClient, video_bytes: bytes) -> dict:
    response = client.post("/api/videos/upload", files={"video": ("skate.mp4", video_bytes, "video/mp4")})
    assert response.status_code == 201
    return response.json()["data"]
