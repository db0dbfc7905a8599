"""
Video Presentation Layer.

HTTP controllers, routes and schemas for the video API.
"""

from .controllers import VideoController, StreamingController, SplitController
from .routes import create_video_routes

__all__ = [
    "VideoController",
    "StreamingController",
    "SplitController",
    "create_video_routes",
]
