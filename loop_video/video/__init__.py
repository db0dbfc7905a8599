"""
Video Module for the Loop Video Service.

This module provides video upload, range streaming and splitting
following clean architecture principles.
"""

from .domain.models import ByteRangePlan, SegmentWindow, VideoRecord
from .domain.planners import RangePlanner, SegmentPlanner
from .integration import VideoModule

__all__ = ["ByteRangePlan", "SegmentWindow", "VideoRecord", "RangePlanner", "SegmentPlanner", "VideoModule"]
