"""
Unit tests for loguru sink configuration.
"""

import sys

import pytest
from loguru import logger

from src.config import config
from src.utils.logging_utils import configure_logging


@pytest.fixture(autouse=True)
def restore_default_sink():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_file_sink_written(monkeypatch, tmp_path):
    monkeypatch.setattr(config.paths, "logs_dir", tmp_path / "logs")

    configure_logging(level="info", log_to_file=True)
    logger.info("classification confirmed")
    logger.remove()

    log_file = tmp_path / "logs" / "learnstyle.log"
    assert log_file.exists()
    assert "classification confirmed" in log_file.read_text(encoding="utf-8")


def test_no_file_sink_by_default(monkeypatch, tmp_path):
    monkeypatch.setattr(config.paths, "logs_dir", tmp_path / "logs")
    monkeypatch.setattr(config.logging, "log_to_file", False)

    configure_logging()

    assert not (tmp_path / "logs").exists()
