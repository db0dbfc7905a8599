"""Tests for configuration loading and logging setup."""

import json
import logging
from pathlib import Path

import pytest

from loop_video.core.config import Config, DEFAULT_VIDEO_MIME_TYPES
from loop_video.core.logging_config import ColoredFormatter, get_error_tracker, get_performance_logger


def test_defaults_written_when_file_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PORT", raising=False)

    config = Config("config.json")

    assert config.server.port == 3001
    assert config.storage.max_file_size_bytes == 500 * 1024 * 1024
    assert config.storage.allowed_mime_types == DEFAULT_VIDEO_MIME_TYPES
    assert (config.split.min_parts, config.split.max_parts, config.split.ping_pong) == (2, 6, True)

    saved = json.loads((tmp_path / "config.json").read_text())
    assert set(saved) == {"server", "storage", "split", "system"}
    assert (tmp_path / "uploads" / "work").is_dir()


def test_sections_loaded_from_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "server": {"port": 8080},
        "storage": {"upload_dir": str(tmp_path / "u"), "work_dir": str(tmp_path / "w"), "max_file_size_mb": 5},
        "split": {"max_parts": 4, "ping_pong": False},
    }))

    config = Config(str(config_file))

    assert config.server.port == 8080
    assert config.storage.max_file_size_bytes == 5 * 1024 * 1024
    assert config.split.max_parts == 4
    assert config.split.ping_pong is False
    assert config.system.log_level == "INFO"


def test_port_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "4100")
    assert Config("config.json", save_defaults=False).server.port == 4100

    monkeypatch.setenv("PORT", "not-a-port")
    assert Config("config.json", save_defaults=False).server.port == 3001


def test_invalid_part_limits_reset(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.json").write_text(json.dumps({"split": {"min_parts": 5, "max_parts": 3}}))

    config = Config("config.json")
    assert (config.split.min_parts, config.split.max_parts) == (2, 6)


def test_unreadable_file_falls_back_to_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PORT", raising=False)
    (tmp_path / "config.json").write_text("{not json")

    config = Config("config.json")
    assert config.server.port == 3001


def test_colored_formatter_leaves_record_untouched() -> None:
    record = logging.LogRecord("loop_video", logging.WARNING, __file__, 1, "careful", None, None)
    output = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[33mWARNING" in output
    assert record.levelname == "WARNING"


def test_performance_and_error_tracking() -> None:
    perf = get_performance_logger("tests")
    perf.start_timer("work")
    assert perf.end_timer("work") >= 0
    assert perf.end_timer("never-started") == 0.0

    tracker = get_error_tracker("tests")
    tracker.log_error(ValueError("bad"), "parsing")
    tracker.log_error(ValueError("worse"), "parsing")
    assert tracker.error_count == 2
