"""
Video HTTP Controllers.

Handle HTTP requests and responses for video operations.
"""

import logging
from typing import List, NoReturn, Optional

from fastapi import HTTPException, Request, Response, UploadFile
from fastapi.responses import FileResponse, StreamingResponse
from starlette.background import BackgroundTask

from ..application.split_service import SplitService
from ..application.streaming_service import StreamingService
from ..application.video_service import VideoService
from ..domain.errors import InvalidDuration, InvalidInput, InvalidPartCount, UploadRejected, VideoError
from ..domain.models import VideoRecord
from .schemas import (
    MessageResponse, ProcessRequest, SegmentPlanData, SegmentPlanResponse,
    SegmentWindowInfo, VideoInfo, VideoListResponse, VideoResponse
)


def raise_http_error(error: Exception) -> NoReturn:
    """Translate a service or planner error into an HTTPException"""
    if isinstance(error, VideoError):
        raise HTTPException(status_code=error.status_code, detail={"message": error.message, "error": error.error_code}) from error
    if isinstance(error, InvalidPartCount):
        raise HTTPException(status_code=400, detail={"message": str(error), "error": "INVALID_PART_COUNT"}) from error
    if isinstance(error, InvalidDuration):
        raise HTTPException(status_code=422, detail={"message": str(error), "error": "INVALID_DURATION"}) from error
    if isinstance(error, InvalidInput):
        raise HTTPException(status_code=400, detail={"message": str(error), "error": "INVALID_INPUT"}) from error
    raise error


def to_video_info(record: VideoRecord) -> VideoInfo:
    """Convert domain model to response model"""
    return VideoInfo(
        video_id=record.video_id,
        filename=record.filename,
        original_name=record.original_name,
        mime_type=record.mime_type,
        size=record.size_bytes,
        uploaded_at=record.uploaded_at,
    )


class VideoController:
    """Controller for upload, metadata and deletion"""

    def __init__(self, video_service: VideoService):
        self.video_service = video_service
        self.logger = logging.getLogger(__name__)

    async def upload_video(self, videos: Optional[List[UploadFile]]) -> VideoResponse:
        videos = [video for video in videos or [] if video.filename]
        if not videos:
            raise HTTPException(status_code=400, detail={"message": "No video file provided", "error": "VIDEO_FILE_REQUIRED"})

        try:
            if len(videos) > 1:
                self.logger.warning(f"Rejected upload with {len(videos)} files")
                raise UploadRejected("Too many files. Only one file allowed per upload.", error_code="TOO_MANY_FILES")

            video = videos[0]
            record = await self.video_service.upload_video(video, video.filename, video.content_type)
        except (VideoError, InvalidInput) as e:
            raise_http_error(e)
        finally:
            for video in videos:
                await video.close()

        return VideoResponse(message="Video uploaded successfully", data=to_video_info(record))

    async def get_video(self, video_id: str) -> VideoResponse:
        try:
            record = await self.video_service.get_video(video_id)
        except VideoError as e:
            raise_http_error(e)
        return VideoResponse(data=to_video_info(record))

    async def list_videos(self) -> VideoListResponse:
        records = await self.video_service.list_videos()
        videos = [to_video_info(record) for record in records]
        return VideoListResponse(data=videos, count=len(videos))

    async def delete_video(self, video_id: str) -> MessageResponse:
        try:
            await self.video_service.delete_video(video_id)
        except VideoError as e:
            raise_http_error(e)
        return MessageResponse(message="Video deleted successfully")


class StreamingController:
    """Controller for video streaming operations"""

    def __init__(self, streaming_service: StreamingService):
        self.streaming_service = streaming_service
        self.logger = logging.getLogger(__name__)

    async def stream_video(self, video_id: str, request: Request) -> Response:
        """Stream video with range request support"""
        try:
            record, plan = await self.streaming_service.prepare_stream(video_id, request.headers.get("range"))
        except VideoError as e:
            raise_http_error(e)

        if not plan.is_satisfiable:
            # No body; the client retries with a corrected range
            return Response(status_code=416, headers=plan.response_headers())

        return StreamingResponse(
            self.streaming_service.open_stream(record, plan),
            status_code=plan.status,
            headers=plan.response_headers(),
            media_type=record.mime_type
        )

    async def download_video(self, video_id: str) -> FileResponse:
        """Original upload as an attachment"""
        try:
            record = await self.streaming_service.video_service.get_video(video_id)
        except VideoError as e:
            raise_http_error(e)

        if not record.file_exists:
            raise HTTPException(status_code=404, detail={"message": "Video file not found on disk", "error": "FILE_NOT_FOUND"})

        return FileResponse(record.path, media_type=record.mime_type, filename=record.original_name)


class SplitController:
    """Controller for segment planning and server-side splitting"""

    def __init__(self, split_service: SplitService):
        self.split_service = split_service
        self.logger = logging.getLogger(__name__)

    async def get_segment_plan(self, video_id: str, parts: int) -> SegmentPlanResponse:
        try:
            record, windows = await self.split_service.plan_segments(video_id, parts)
        except (VideoError, InvalidInput) as e:
            raise_http_error(e)

        return SegmentPlanResponse(
            data=SegmentPlanData(
                video_id=record.video_id,
                duration_seconds=record.duration_seconds,
                parts=len(windows),
                windows=[
                    SegmentWindowInfo(
                        index=window.index,
                        start_time=window.start_time,
                        end_time=window.end_time,
                        duration=window.duration,
                        part_name=window.part_name(record.stem)
                    )
                    for window in windows
                ]
            )
        )

    async def process_video(self, video_id: str, process_request: Optional[ProcessRequest], default_ping_pong: bool) -> FileResponse:
        """Split on the server and return the parts as a zip"""
        process_request = process_request or ProcessRequest()
        ping_pong = default_ping_pong if process_request.ping_pong is None else process_request.ping_pong

        try:
            result = await self.split_service.split_to_archive(video_id, process_request.parts, ping_pong=ping_pong)
        except (VideoError, InvalidInput) as e:
            raise_http_error(e)

        self.logger.info(f"Split {video_id} into {len(result.part_names)} parts (ping-pong: {ping_pong})")

        return FileResponse(
            result.archive_path,
            media_type="application/zip",
            filename=result.archive_name,
            background=BackgroundTask(self.split_service.cleanup_job, result.job_dir)
        )
