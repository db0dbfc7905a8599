"""
API module for the Loop Video Service.
"""

from .server import APIServer, create_app

__all__ = ["APIServer", "create_app"]
