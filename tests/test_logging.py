"""Tests for structlog configuration."""

import io
import json
import sys

import pytest
import structlog

from portwatch.core.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_stderr_resolved_at_write_time(monkeypatch):
    setup_logging(level="INFO", fmt="json")
    logger = get_logger("registry")

    first = io.StringIO()
    monkeypatch.setattr(sys, "stderr", first)
    logger.info("ports_refreshed", count=3)

    second = io.StringIO()
    monkeypatch.setattr(sys, "stderr", second)
    first.close()
    logger.warning("using_stale_port_cache", cached=2)

    event = json.loads(second.getvalue())
    assert event["event"] == "using_stale_port_cache"
    assert event["component"] == "registry"
    assert event["level"] == "warning"


def test_level_filtering(monkeypatch):
    stream = io.StringIO()
    monkeypatch.setattr(sys, "stderr", stream)
    setup_logging(level="ERROR", fmt="json")

    get_logger("registry").info("ports_refreshed")
    assert stream.getvalue() == ""


def test_log_file(tmp_path):
    target = tmp_path / "logs" / "portwatch.log"
    setup_logging(level="DEBUG", fmt="json", log_file=target)
    get_logger("dashboard").info("dashboard_started", adapter="fake")
    setup_logging(level="DEBUG", fmt="json")

    event = json.loads(target.read_text().strip())
    assert event["event"] == "dashboard_started"
    assert event["adapter"] == "fake"
