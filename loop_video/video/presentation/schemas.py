"""
Video API Request/Response Schemas.

Pydantic models for API serialization and validation. Keys are camelCase on
the wire to match the browser client.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serializing field names as camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoInfo(ApiModel):
    """Uploaded video metadata"""
    video_id: str = Field(..., description="Unique video identifier")
    filename: str = Field(..., description="Stored file name")
    original_name: str = Field(..., description="File name as uploaded")
    mime_type: str = Field(..., description="MIME type reported at upload")
    size: int = Field(..., description="File size in bytes")
    uploaded_at: datetime = Field(..., description="Upload timestamp (UTC)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "videoId": "0b7e3f0c-2d7e-4f0f-9a3c-3f1b2d0c9e11",
                "filename": "5f0c8a52-6f7b-4d8e-9a1b-7c2d3e4f5a6b.mp4",
                "originalName": "skate.mp4",
                "mimeType": "video/mp4",
                "size": 52428800,
                "uploadedAt": "2025-08-04T14:30:22Z"
            }
        }
    )


class VideoResponse(ApiModel):
    success: bool = True
    message: Optional[str] = None
    data: VideoInfo


class VideoListResponse(ApiModel):
    success: bool = True
    data: List[VideoInfo] = Field(..., description="Uploaded videos")
    count: int = Field(..., description="Number of videos")


class MessageResponse(ApiModel):
    success: bool = True
    message: str


class ErrorResponse(ApiModel):
    success: bool = False
    message: str
    error: str = Field(..., description="Machine-readable error code")


class HealthResponse(ApiModel):
    status: str = "OK"
    timestamp: datetime


class SegmentWindowInfo(ApiModel):
    """One segment window of a split plan"""
    index: int = Field(..., description="Zero-based part index")
    start_time: float = Field(..., description="Window start in seconds")
    end_time: float = Field(..., description="Window end in seconds (exclusive)")
    duration: float = Field(..., description="Window length in seconds")
    part_name: str = Field(..., description="File name of the rendered part")


class SegmentPlanData(ApiModel):
    video_id: str
    duration_seconds: float
    parts: int
    windows: List[SegmentWindowInfo]


class SegmentPlanResponse(ApiModel):
    success: bool = True
    data: SegmentPlanData

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "data": {
                    "videoId": "0b7e3f0c-2d7e-4f0f-9a3c-3f1b2d0c9e11",
                    "durationSeconds": 90.0,
                    "parts": 3,
                    "windows": [
                        {"index": 0, "startTime": 0.0, "endTime": 30.0, "duration": 30.0, "partName": "skate_part1.mp4"},
                        {"index": 1, "startTime": 30.0, "endTime": 60.0, "duration": 30.0, "partName": "skate_part2.mp4"},
                        {"index": 2, "startTime": 60.0, "endTime": 90.0, "duration": 30.0, "partName": "skate_part3.mp4"}
                    ]
                }
            }
        }
    )


class ProcessRequest(ApiModel):
    """Server-side split request"""
    parts: int = Field(2, description="Number of parts to split into")
    ping_pong: Optional[bool] = Field(None, description="Append a reversed copy of each part (server default when omitted)")
