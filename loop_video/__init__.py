"""
Loop Video Service

Upload short videos, stream them with HTTP range support, and split them
into equal ping-pong parts.
"""

__version__ = "1.0.0"

from .main import LoopVideoSystem

__all__ = ["LoopVideoSystem"]
