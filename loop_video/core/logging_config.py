"""
Logging configuration for the Loop Video Service.

Console output is colored by level; the optional log file rotates at 10MB
and keeps five backups. Split jobs are timed with PerformanceLogger and
unhandled request errors are counted by ErrorTracker.
"""

import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional


# Component loggers and their level when the service is not in DEBUG
COMPONENT_LEVELS = {
    "loop_video.api.access": logging.INFO,
    "loop_video.video": logging.INFO,
    "uvicorn": logging.WARNING,
    "fastapi": logging.WARNING,
}


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # Color a copy so the file handler still sees the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class LoopVideoLogger:
    """Root logger setup for the service process"""

    def __init__(self, log_level: str = "INFO", log_file: Optional[str] = None):
        self.log_level = log_level.upper()
        self.log_file = log_file
        self._setup_logging()

    def _setup_logging(self) -> None:
        level = getattr(logging, self.log_level, logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(console_handler)

        if self.log_file:
            try:
                Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.handlers.RotatingFileHandler(self.log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
                file_handler.setLevel(logging.DEBUG)  # File gets all messages
                file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
                ))
                root_logger.addHandler(file_handler)
            except OSError as e:
                print(f"Warning: Could not setup file logging: {e}")

        self._setup_component_loggers()

        logging.getLogger(__name__).info(f"Logging initialized - Level: {self.log_level}, File: {self.log_file}")

    def _setup_component_loggers(self) -> None:
        """Quiet uvicorn and fastapi unless debugging; video logs follow DEBUG"""
        debugging = self.log_level == "DEBUG"
        for name, level in COMPONENT_LEVELS.items():
            if debugging:
                level = logging.DEBUG if name.startswith("loop_video") else logging.INFO
            logging.getLogger(name).setLevel(level)

    @staticmethod
    def setup_exception_logging() -> None:
        """Route uncaught exceptions (outside request handling) to the log"""

        def handle_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return
            logging.getLogger("uncaught_exception").critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

        sys.excepthook = handle_exception


class PerformanceLogger:
    """Times one operation at a time; create one per job"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"performance.{name}")
        self.start_time: Optional[float] = None

    def start_timer(self, operation: str) -> None:
        self.start_time = time.time()
        self.logger.debug(f"Started: {operation}")

    def end_timer(self, operation: str) -> float:
        """Log and return the elapsed seconds, or 0.0 if never started"""
        if self.start_time is None:
            self.logger.warning(f"Timer not started for: {operation}")
            return 0.0

        duration = time.time() - self.start_time
        self.logger.info(f"Completed: {operation} in {duration:.3f}s")
        self.start_time = None
        return duration


class ErrorTracker:
    """Logs errors with a traceback and keeps a running count"""

    def __init__(self, component_name: str):
        self.component_name = component_name
        self.logger = logging.getLogger(f"errors.{component_name}")
        self.error_count = 0

    def log_error(self, error: Exception, context: str = "") -> None:
        self.error_count += 1
        where = f" ({context})" if context else ""
        self.logger.error(f"Error in {self.component_name}{where}: {error}", exc_info=error)


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> LoopVideoLogger:
    """Setup logging for the entire application"""
    logger_setup = LoopVideoLogger(log_level=log_level, log_file=log_file)
    LoopVideoLogger.setup_exception_logging()
    return logger_setup


def get_performance_logger(component_name: str) -> PerformanceLogger:
    return PerformanceLogger(component_name)


def get_error_tracker(component_name: str) -> ErrorTracker:
    return ErrorTracker(component_name)
