"""Tests for dashboard painting against a recording screen."""

import pytest

from portwatch.core.config import Settings
from portwatch.core.exceptions import AdapterError
from portwatch.ports.registry import PortRegistry
from portwatch.tui import render
from portwatch.tui.controller import DashboardController
from portwatch.tui.render import DashboardRenderer


class RecordingScreen:
    """Collects addstr calls as {row: text}."""

    def __init__(self, height: int = 24, width: int = 100) -> None:
        self.size = (height, width)
        self.lines: dict[int, str] = {}

    def erase(self) -> None:
        self.lines.clear()

    def getmaxyx(self) -> tuple[int, int]:
        return self.size

    def addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        self.lines[y] = self.lines.get(y, "") + text

    def noutrefresh(self) -> None:
        pass

    def refresh(self) -> None:
        pass


@pytest.fixture(autouse=True)
def no_terminal(monkeypatch):
    monkeypatch.setattr(render.curses, "color_pair", lambda pair: 0)
    monkeypatch.setattr(render.curses, "doupdate", lambda: None)


async def draw(adapter) -> RecordingScreen:
    controller = DashboardController(
        PortRegistry(adapter=adapter, freshness_window=0),
        settings=Settings(),
    )
    await controller.refresh()
    screen = RecordingScreen()
    DashboardRenderer(screen, controller).draw()
    return screen


async def test_column_headers_below_title(fake_adapter):
    screen = await draw(fake_adapter)
    assert "PORT" in screen.lines[1]
    assert "Unexpected Ports" in screen.lines[2]


async def test_error_banner_keeps_column_headers(fake_adapter):
    fake_adapter.detect_error = AdapterError("permission denied", operation="detect_ports")
    screen = await draw(fake_adapter)

    assert "permission denied" in screen.lines[1]
    assert "PORT" in screen.lines[2]
    assert "PROCESS" in screen.lines[2]
