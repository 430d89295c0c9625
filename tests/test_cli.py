"""Tests for the command-line interface."""

import json

import pytest
import structlog
from typer.testing import CliRunner

from portwatch.cli import app as cli_app
from portwatch.core.config import get_settings
from portwatch.core.exceptions import AdapterError
from portwatch.ports.organizer import PortOrganizer
from portwatch.ports.registry import PortRegistry
from portwatch.version import __version__

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch):
    monkeypatch.setenv("PORTWATCH_LOG_LEVEL", "ERROR")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def detected(monkeypatch, fake_adapter):
    """Point the CLI at the fake adapter."""
    registry = PortRegistry(adapter=fake_adapter, freshness_window=0)
    organizer = PortOrganizer()

    def fake_detect():
        return registry, organizer.process_ports(fake_adapter.ports)

    monkeypatch.setattr(cli_app, "_detect", fake_detect)
    return fake_adapter


def test_version():
    result = runner.invoke(cli_app.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_list_table(detected):
    result = runner.invoke(cli_app.app, ["list"])
    assert result.exit_code == 0
    assert "5432" in result.output
    assert "3 listening ports" in result.output


def test_list_output_file_with_category(detected, tmp_path):
    target = tmp_path / "ports.json"
    result = runner.invoke(cli_app.app, ["list", "--category", "database", "--output", str(target)])

    assert result.exit_code == 0
    data = json.loads(target.read_text())
    assert [g["type"] for g in data["groups"]] == ["database"]
    assert [p["port"] for p in data["ports"]] == [5432]


def test_list_detection_failure(monkeypatch):
    def broken():
        raise RuntimeError("netlink unavailable")

    monkeypatch.setattr(cli_app, "_detect", broken)
    result = runner.invoke(cli_app.app, ["list"])
    assert result.exit_code == 1
    assert "netlink unavailable" in result.output


def test_kill_with_yes(detected):
    result = runner.invoke(cli_app.app, ["kill", "5432", "--yes"])
    assert result.exit_code == 0
    assert detected.killed == [(500, False)]
    assert "Killed" in result.output


def test_kill_force(detected):
    result = runner.invoke(cli_app.app, ["kill", "22", "--yes", "--force"])
    assert result.exit_code == 0
    assert detected.killed == [(22, True)]


def test_kill_declined(detected):
    result = runner.invoke(cli_app.app, ["kill", "3000"], input="n\n")
    assert result.exit_code == 0
    assert detected.killed == []


def test_kill_failure_exit_code(detected):
    detected.kill_result = False
    result = runner.invoke(cli_app.app, ["kill", "3000", "--yes"])
    assert result.exit_code == 1


def test_kill_nothing_listening(detected):
    result = runner.invoke(cli_app.app, ["kill", "9999", "--yes"])
    assert result.exit_code == 1
    assert "Nothing is listening" in result.output
    assert detected.killed == []


def test_info(detected):
    result = runner.invoke(cli_app.app, ["info", "3000"])
    assert result.exit_code == 0
    assert "node server.js --full" in result.output


def test_config_validate_rejects_bad_bindings(monkeypatch):
    monkeypatch.setenv("PORTWATCH_KEY_BINDINGS", json.dumps({"teleport": ["t"]}))
    get_settings.cache_clear()

    result = runner.invoke(cli_app.app, ["config", "--validate"])
    assert result.exit_code == 1
    assert "Configuration errors" in result.output


def test_config_validate_ok():
    result = runner.invoke(cli_app.app, ["config", "--validate"])
    assert result.exit_code == 0
    assert "Configuration is valid" in result.output


async def test_logging_after_invoke_does_not_break_error_paths(fake_adapter):
    runner.invoke(cli_app.app, ["config", "--validate"])

    fake_adapter.detect_error = AdapterError("socket table unavailable", operation="detect_ports")
    registry = PortRegistry(adapter=fake_adapter, freshness_window=0)
    with pytest.raises(AdapterError, match="socket table unavailable"):
        await registry.detect_ports()
