"""
Video API Routes.

FastAPI route definitions for video upload, streaming and splitting.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Query, Request, UploadFile

from .controllers import VideoController, StreamingController, SplitController
from .schemas import (
    MessageResponse, ProcessRequest, SegmentPlanResponse,
    VideoListResponse, VideoResponse
)


def create_video_routes(
    video_controller: VideoController,
    streaming_controller: StreamingController,
    split_controller: SplitController,
    default_ping_pong: bool = True
) -> APIRouter:
    """Create video API routes with dependency injection"""

    router = APIRouter(prefix="/api/videos", tags=["videos"])

    @router.post("/upload", response_model=VideoResponse, status_code=201)
    async def upload_video(video: Optional[List[UploadFile]] = File(None, description="Video file to upload")):
        """
        Upload a single video file (multipart field ``video``).

        Accepts common video MIME types up to the configured size limit.
        Only one file may be sent per request.
        """
        return await video_controller.upload_video(video)

    @router.get("", response_model=VideoListResponse)
    async def list_videos():
        """List all uploaded videos"""
        return await video_controller.list_videos()

    @router.get("/{video_id}", response_model=VideoResponse)
    async def get_video(video_id: str):
        """
        Get metadata for a specific video.

        - **video_id**: Unique identifier returned by the upload
        """
        return await video_controller.get_video(video_id)

    @router.get("/{video_id}/stream")
    async def stream_video(video_id: str, request: Request):
        """
        Stream video with HTTP range request support.

        Supports:
        - **Range requests**: ``bytes=start-end`` and ``bytes=start-`` for seeking
        - **Partial content**: 206 responses with Content-Range
        - **Unsatisfiable ranges**: 416 with ``Content-Range: bytes */size``

        Usage in HTML5:
        ```html
        <video controls>
            <source src="/api/videos/{video_id}/stream" type="video/mp4">
        </video>
        ```
        """
        return await streaming_controller.stream_video(video_id, request)

    @router.get("/{video_id}/download")
    async def download_video(video_id: str):
        """Download the original upload as an attachment"""
        return await streaming_controller.download_video(video_id)

    @router.get("/{video_id}/segments", response_model=SegmentPlanResponse)
    async def get_segment_plan(
        video_id: str,
        parts: int = Query(2, description="Number of equal parts")
    ):
        """
        Get the segment windows a split into ``parts`` would use.

        Browser clients that capture parts locally use these windows so
        both split paths cut at identical boundaries.
        """
        return await split_controller.get_segment_plan(video_id, parts)

    @router.post("/{video_id}/process")
    async def process_video(video_id: str, process_request: Optional[ProcessRequest] = None):
        """
        Split a video on the server and download the parts as a zip.

        - **parts**: Number of equal parts
        - **pingPong**: Append a reversed copy of each part
        """
        return await split_controller.process_video(video_id, process_request, default_ping_pong)

    @router.delete("/{video_id}", response_model=MessageResponse)
    async def delete_video(video_id: str):
        """Delete a video and its file"""
        return await video_controller.delete_video(video_id)

    return router
