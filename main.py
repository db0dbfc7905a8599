#!/usr/bin/env python3
"""
Main entry point for the Loop Video Service.

Starts the HTTP API for uploading, streaming and splitting videos.
"""

from loop_video.main import main

if __name__ == "__main__":
    main()
