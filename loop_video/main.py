"""
Main Application Coordinator for the Loop Video Service.

This module loads configuration, sets up logging and serves the API.
"""

import argparse
import logging
import sys
from typing import Optional

from .core.config import Config
from .core.logging_config import setup_logging, get_error_tracker
from .api.server import APIServer
from .video.integration import VideoModule


class LoopVideoSystem:
    """Main application coordinator for the Loop Video Service"""

    def __init__(self, config_file: Optional[str] = None):
        # Load configuration first (basic logging will be used initially)
        self.config = Config(config_file)

        self.logger_setup = setup_logging(log_level=self.config.system.log_level, log_file=self.config.system.log_file)
        self.logger = logging.getLogger(__name__)
        self.error_tracker = get_error_tracker("main_system")

        self.video_module = VideoModule(self.config)
        self.api_server = APIServer(self.config, self.video_module)

        self.logger.info("Loop Video Service initialized")

    def run(self) -> bool:
        """Serve until interrupted. Uvicorn handles SIGINT/SIGTERM for a graceful stop."""
        status = self.video_module.get_module_status()
        if not status["splitting_available"]:
            self.logger.warning("FFmpeg not found - /process will answer 503 until it is installed")

        try:
            self.api_server.run()
            return True
        except Exception as e:
            self.error_tracker.log_error(e, "api_server")
            return False
        finally:
            self.logger.info("Loop Video Service stopped")


def main():
    """Main entry point for the application"""
    parser = argparse.ArgumentParser(description="Loop Video Service")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level")
    parser.add_argument("--port", type=int, help="Override API port")
    args = parser.parse_args()

    system = LoopVideoSystem(args.config)

    if args.log_level:
        logging.getLogger().setLevel(getattr(logging, args.log_level))
    if args.port:
        system.config.server.port = args.port

    if not system.run():
        sys.exit(1)


if __name__ == "__main__":
    main()
