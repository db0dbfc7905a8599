"""
Loop Video Service - Core Module

Configuration management and logging setup shared by the API server
and the video module.
"""

from .config import Config
from .logging_config import setup_logging, get_performance_logger, get_error_tracker

__all__ = ["Config", "setup_logging", "get_performance_logger", "get_error_tracker"]
