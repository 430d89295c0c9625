"""Interactive curses dashboard."""

import asyncio
import curses
import time

from portwatch.core.config import Settings, get_settings
from portwatch.core.interfaces import IPlatformAdapter
from portwatch.core.logging import get_logger
from portwatch.ports.pipeline import create_organizer, create_registry
from portwatch.tui.controller import DashboardController
from portwatch.tui.keyboard import KeyMap, key_name
from portwatch.tui.render import Colors, DashboardRenderer


class Dashboard:
    """Runs the controller against a real terminal."""

    POLL_INTERVAL_MS = 100

    def __init__(
        self,
        settings: Settings | None = None,
        adapter: IPlatformAdapter | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.logger = get_logger("dashboard_ui")
        self._adapter = adapter
        self._renderer: DashboardRenderer | None = None
        self.controller: DashboardController | None = None

    def run(self) -> None:
        """Take over the terminal until the user quits."""
        # Validate bindings and presets before curses owns the screen
        key_map = KeyMap.from_overrides(self.settings.key_bindings)
        organizer = create_organizer(self.settings)
        registry = create_registry(self.settings, self._adapter)
        self.controller = DashboardController(
            registry,
            organizer=organizer,
            key_map=key_map,
            render=self._draw,
            settings=self.settings,
        )
        self.logger.info("dashboard_started", adapter=registry.adapter.name)
        curses.wrapper(self._wrapped)
        self.logger.info("dashboard_stopped")

    def _wrapped(self, screen: "curses.window") -> None:
        asyncio.run(self._main_loop(screen))

    def _draw(self) -> None:
        if self._renderer is not None:
            self._renderer.draw()

    async def _main_loop(self, screen: "curses.window") -> None:
        assert self.controller is not None
        controller = self.controller

        try:
            curses.curs_set(0)
        except curses.error:
            pass
        if hasattr(curses, "set_escdelay"):
            curses.set_escdelay(25)
        Colors.init()
        screen.keypad(True)
        screen.timeout(self.POLL_INTERVAL_MS)

        self._renderer = DashboardRenderer(screen, controller)
        self._draw()
        await controller.refresh()
        self._draw()
        last_refresh = time.monotonic()

        while controller.state.running:
            code = screen.getch()
            if code == -1:
                state = controller.state
                due = time.monotonic() - last_refresh >= self.settings.refresh_interval_seconds
                if due and not state.modal_open and not state.is_killing:
                    await controller.refresh()
                    last_refresh = time.monotonic()
                    self._draw()
                continue

            name = key_name(code)
            if name == "resize":
                curses.update_lines_cols()
                self._draw()
                continue
            if name is None:
                continue

            # One handler at a time; the next key waits for this one
            await controller.handle_key(name)
            self._draw()
