"""
Configuration management for the Loop Video Service.

This module handles all configuration settings including the HTTP server,
upload storage, split processing and logging parameters.
"""

import os
import json
import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, asdict, field
from pathlib import Path


DEFAULT_VIDEO_MIME_TYPES = [
    "video/mp4",
    "video/mpeg",
    "video/quicktime",
    "video/x-msvideo",  # .avi
    "video/webm",
    "video/ogg",
    "video/x-flv",
    "video/3gpp",
    "video/x-ms-wmv",
]


@dataclass
class ServerConfig:
    """HTTP server configuration"""

    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class StorageConfig:
    """Upload storage configuration"""

    upload_dir: str = "uploads"
    work_dir: str = "uploads/work"  # Scratch space for split jobs
    max_file_size_mb: int = 500
    allowed_mime_types: List[str] = field(default_factory=lambda: list(DEFAULT_VIDEO_MIME_TYPES))

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


@dataclass
class SplitConfig:
    """Server-side split configuration"""

    min_parts: int = 2
    max_parts: int = 6
    ping_pong: bool = True  # Append a reversed copy of each part by default
    ffmpeg_binary: str = "ffmpeg"


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = "loop_video.log"


class Config:
    """Main configuration manager"""

    def __init__(self, config_file: Optional[str] = None, save_defaults: bool = True):
        self.config_file = config_file or "config.json"
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.server = ServerConfig()
        self.storage = StorageConfig()
        self.split = SplitConfig()
        self.system = SystemConfig()

        # Load configuration
        self.load_config(save_defaults=save_defaults)

        # Environment overrides
        self._apply_environment()

        # Ensure storage directories exist
        self._ensure_storage_directories()

    def load_config(self, save_defaults: bool = True) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config_data = json.load(f)

                if "server" in config_data:
                    self.server = ServerConfig(**config_data["server"])

                if "storage" in config_data:
                    self.storage = StorageConfig(**config_data["storage"])

                if "split" in config_data:
                    self.split = SplitConfig(**config_data["split"])

                if "system" in config_data:
                    self.system = SystemConfig(**config_data["system"])

                self.logger.info(f"Configuration loaded from {config_path}")

            except (OSError, ValueError, TypeError) as e:
                self.logger.error(f"Error loading config from {config_path}: {e}")
        else:
            self.logger.info(f"Config file {config_path} not found, using defaults")
            if save_defaults:
                self.save_config()

        self._validate()

    def save_config(self) -> None:
        """Save current configuration to file"""
        try:
            with open(self.config_file, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except OSError as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def _apply_environment(self) -> None:
        """Apply environment variable overrides"""
        port = os.environ.get("PORT")
        if port:
            try:
                self.server.port = int(port)
            except ValueError:
                self.logger.warning(f"Ignoring invalid PORT value: {port!r}")

        log_level = os.environ.get("LOOP_VIDEO_LOG_LEVEL")
        if log_level:
            self.system.log_level = log_level.upper()

    def _validate(self) -> None:
        """Reset nonsensical split limits to defaults"""
        if self.split.min_parts < 1 or self.split.max_parts < self.split.min_parts:
            self.logger.warning(f"Invalid split part limits {self.split.min_parts}-{self.split.max_parts}, using defaults")
            defaults = SplitConfig()
            self.split.min_parts = defaults.min_parts
            self.split.max_parts = defaults.max_parts

    def _ensure_storage_directories(self) -> None:
        """Ensure upload and work directories exist"""
        try:
            Path(self.storage.upload_dir).mkdir(parents=True, exist_ok=True)
            Path(self.storage.work_dir).mkdir(parents=True, exist_ok=True)
            self.logger.info("Storage directories verified/created")
        except OSError as e:
            self.logger.error(f"Error creating storage directories: {e}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {"server": asdict(self.server), "storage": asdict(self.storage), "split": asdict(self.split), "system": asdict(self.system)}
