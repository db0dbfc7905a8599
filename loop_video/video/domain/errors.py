"""
Video Domain Errors.

Exceptions raised by the planners and the services built on top of them.
"""

from typing import Optional


class InvalidInput(ValueError):
    """Planner received input it cannot plan over"""


class InvalidLength(InvalidInput):
    """Resource length is not a positive integer"""


class InvalidDuration(InvalidInput):
    """Media duration is unknown, negative or non-finite"""


class InvalidPartCount(InvalidInput):
    """Part count is not an integer >= 1"""


class VideoError(Exception):
    """Base class for video service errors"""

    error_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, error_code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code


class VideoNotFound(VideoError):
    error_code = "VIDEO_NOT_FOUND"
    status_code = 404

    def __init__(self, video_id: str):
        super().__init__("Video not found")
        self.video_id = video_id


class VideoFileMissing(VideoError):
    error_code = "FILE_NOT_FOUND"
    status_code = 404

    def __init__(self, video_id: str):
        super().__init__("Video file not found on disk")
        self.video_id = video_id


class UploadRejected(VideoError):
    """Upload refused before or while writing to disk"""

    error_code = "UPLOAD_FAILED"
    status_code = 400


class TranscoderUnavailable(VideoError):
    error_code = "TRANSCODER_UNAVAILABLE"
    status_code = 503


class SegmentProcessingError(VideoError):
    """A trim/reverse/concatenate step failed for one window"""

    error_code = "SPLIT_FAILED"
    status_code = 500

    def __init__(self, message: str, segment_index: Optional[int] = None):
        super().__init__(message)
        self.segment_index = segment_index
