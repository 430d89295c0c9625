"""Keyboard-driven state machine behind the dashboard."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
from typing import Any

from portwatch.actions.port_actions import (
    copy_command_to_clipboard,
    get_full_command,
    kill_port,
    view_port_logs,
)
from portwatch.core.config import Settings, get_settings
from portwatch.core.interfaces import IPlatformAdapter
from portwatch.core.logging import get_logger
from portwatch.models import (
    DashboardState,
    PortDetectionResult,
    PortGroup,
    PortInfo,
    SortKey,
)
from portwatch.ports.organizer import PortOrganizer
from portwatch.ports.registry import PortRegistry
from portwatch.tui.keyboard import KeyMap, Shortcut

COMMAND_PLACEHOLDER = "Loading..."
NO_LOGS_PLACEHOLDER = "No logs available"

SORT_KEYS: dict[SortKey, Callable[[PortInfo], Any]] = {
    SortKey.PORT: lambda p: p.port,
    SortKey.PROCESS: lambda p: (p.process_name.lower(), p.port),
    SortKey.PID: lambda p: (p.pid, p.port),
}

StateUpdater = Callable[[DashboardState], None]


@dataclass(frozen=True, slots=True)
class DisplayRow:
    """A visible dashboard line: a group header or one of its ports."""

    group: PortGroup
    port: PortInfo | None = None

    @property
    def is_header(self) -> bool:
        return self.port is None


def port_matches_filter(port: PortInfo, text: str) -> bool:
    """Case-insensitive match on port number, process, command or category."""
    needle = text.strip().lower().lstrip(":")
    if not needle:
        return True
    fields = (str(port.port), port.process_name, port.command, port.type or "")
    return any(needle in field.lower() for field in fields)


class DashboardController:
    """Owns the dashboard state and handles one keyboard event at a time.

    State is only changed through ``set_state``. Handlers are awaited to
    completion by the caller before the next key is dispatched, and
    ``is_killing`` refuses a second kill while one is in flight.
    """

    def __init__(
        self,
        registry: PortRegistry,
        organizer: PortOrganizer | None = None,
        adapter: IPlatformAdapter | None = None,
        key_map: KeyMap | None = None,
        render: Callable[[], None] | None = None,
        log_source: Callable[[PortInfo], Awaitable[str | None]] | None = None,
        clipboard: Callable[[str], Awaitable[None]] | None = None,
        settings: Settings | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        settings = settings or get_settings()
        self.logger = get_logger("dashboard")
        self._registry = registry
        self._organizer = organizer or PortOrganizer()
        self._adapter = adapter or registry.adapter
        self._key_map = key_map or KeyMap.from_overrides(settings.key_bindings)
        self._render = render or (lambda: None)
        self._log_source = log_source or partial(view_port_logs, self._adapter)
        self._clipboard = clipboard or copy_command_to_clipboard
        self._sleep = sleep
        self._kill_grace_seconds = settings.kill_grace_period_ms / 1000
        self._confirm_kill = settings.confirm_kill

        self._state = DashboardState()
        self._result: PortDetectionResult | None = None
        self._collapsed: set[str] = set()
        self._rows_cache: list[DisplayRow] | None = None

        self._handlers: dict[Shortcut, Callable[[], Awaitable[None]]] = {
            Shortcut.QUIT: self._on_quit,
            Shortcut.UP: partial(self._on_move, -1),
            Shortcut.DOWN: partial(self._on_move, 1),
            Shortcut.SEARCH: self._on_search,
            Shortcut.KILL: self._on_kill,
            Shortcut.COPY: self._on_copy,
            Shortcut.VIEW_COMMAND: self._on_view_command,
            Shortcut.VIEW_LOGS: self._on_view_logs,
            Shortcut.TOGGLE_GROUP: self._on_toggle_group,
            Shortcut.TOGGLE_DETAILS: self._on_toggle_details,
            Shortcut.SORT_PORT: partial(self._on_sort, SortKey.PORT),
            Shortcut.SORT_PROCESS: partial(self._on_sort, SortKey.PROCESS),
            Shortcut.SORT_PID: partial(self._on_sort, SortKey.PID),
            Shortcut.HELP: self._on_help,
            Shortcut.ESCAPE: self._on_escape,
            Shortcut.ENTER: self._on_enter,
        }

    # State access

    @property
    def state(self) -> DashboardState:
        """Current state. Read-only for callers; mutate via ``set_state``."""
        return self._state

    @property
    def result(self) -> PortDetectionResult | None:
        return self._result

    @property
    def key_map(self) -> KeyMap:
        return self._key_map

    def set_state(self, updater: StateUpdater | None = None, **changes: Any) -> None:
        """Apply an updater function and/or field changes to the state."""
        if updater is not None:
            updater(self._state)
        for field, value in changes.items():
            setattr(self._state, field, value)

    @property
    def rows(self) -> list[DisplayRow]:
        if self._rows_cache is None:
            self._rows_cache = self._build_rows()
        return self._rows_cache

    def _build_rows(self) -> list[DisplayRow]:
        if self._result is None:
            return []

        text = self._state.filter
        rows: list[DisplayRow] = []
        for group in self._result.groups:
            ports = [port for port in group.ports if port_matches_filter(port, text)]
            if text.strip() and not ports:
                continue
            rows.append(DisplayRow(group))
            if not group.collapsed:
                rows.extend(DisplayRow(group, port) for port in ports)
        return rows

    @property
    def selected_row(self) -> DisplayRow | None:
        rows = self.rows
        if not rows:
            return None
        return rows[min(self._state.selected_index, len(rows) - 1)]

    def get_selected_port(self) -> tuple[PortInfo, PortGroup] | None:
        row = self.selected_row
        if row is None or row.port is None:
            return None
        return row.port, row.group

    # Operations

    def clear_filtered_ports_cache(self) -> None:
        self._rows_cache = None
        self._clamp_selection()

    def clear_detector_cache(self) -> None:
        self._registry.clear_cache()

    def _clamp_selection(self) -> None:
        count = len(self.rows)
        index = min(self._state.selected_index, max(count - 1, 0))
        if index != self._state.selected_index:
            self.set_state(selected_index=index)

    def move_selection(self, delta: int) -> None:
        count = len(self.rows)
        if count == 0:
            return
        index = max(0, min(count - 1, self._state.selected_index + delta))
        self.set_state(selected_index=index)

    def apply_sorting(self) -> None:
        if self._result is not None:
            sort_key = SORT_KEYS[self._state.sort_by]
            for group in self._result.groups:
                group.ports = sorted(group.ports, key=sort_key)
        self.clear_filtered_ports_cache()

    def toggle_group(self) -> None:
        row = self.selected_row
        if row is None:
            return

        group = row.group
        if group.id in self._collapsed:
            self._collapsed.discard(group.id)
        else:
            self._collapsed.add(group.id)
        group.collapsed = group.id in self._collapsed

        self._rows_cache = None
        # Keep the cursor on the toggled group's header
        for index, candidate in enumerate(self.rows):
            if candidate.is_header and candidate.group.id == group.id:
                self.set_state(selected_index=index)
                break

    async def refresh(self) -> None:
        """Re-detect ports and rebuild groups; failures become an error banner."""
        try:
            ports = await self._registry.detect_ports()
        except Exception as e:
            self.logger.error("refresh_failed", error=str(e))
            self.set_state(error=f"Port detection failed: {e}")
            return

        result = self._organizer.process_ports(ports)
        for group in result.groups:
            group.collapsed = group.id in self._collapsed
        self._result = result
        self.set_state(error=None)
        self.apply_sorting()

    # Keyboard dispatch

    async def handle_key(self, key: str) -> None:
        """Handle a normalised key name."""
        # Status messages last until the next key
        if self._state.status_message is not None:
            self.set_state(status_message=None)

        if self._state.searching and self._handle_search_input(key):
            return

        shortcut = self._key_map.resolve(key)
        if shortcut is None:
            return
        await self.dispatch(shortcut)

    async def dispatch(self, shortcut: Shortcut) -> None:
        await self._handlers[shortcut]()

    def _handle_search_input(self, key: str) -> bool:
        if key == "backspace":
            self.set_state(filter=self._state.filter[:-1])
        elif key == "space":
            self.set_state(filter=self._state.filter + " ")
        elif len(key) == 1 and key.isprintable():
            self.set_state(filter=self._state.filter + key)
        else:
            return False

        self.clear_filtered_ports_cache()
        self._render()
        return True

    async def _on_quit(self) -> None:
        self.set_state(running=False)

    async def _on_move(self, delta: int) -> None:
        if self._state.modal_open:
            return
        self.move_selection(delta)
        self._render()

    async def _on_search(self) -> None:
        if self._state.modal_open:
            return
        self.set_state(searching=True)
        self._render()

    async def _on_kill(self) -> None:
        if self._state.modal_open:
            return
        if not self._confirm_kill:
            await self.kill_selected()
            return

        selected = self.get_selected_port()
        if selected is None or self._state.is_killing:
            return
        port, _ = selected
        self.set_state(
            show_confirm=True,
            confirm_message=(
                f"Kill {port.process_name or 'process'} (PID {port.pid}) on port {port.port}?"
            ),
            confirm_action=partial(self._kill, port),
        )
        self._render()

    async def _on_copy(self) -> None:
        if self._state.modal_open:
            return
        await self.copy_selected()

    async def _on_view_command(self) -> None:
        if self._state.modal_open:
            return
        await self.view_command()

    async def _on_view_logs(self) -> None:
        if self._state.modal_open:
            return
        await self.view_logs()

    async def _on_toggle_group(self) -> None:
        if self._state.modal_open:
            return
        self.toggle_group()
        self.clear_filtered_ports_cache()
        self._render()

    async def _on_toggle_details(self) -> None:
        if self._state.modal_open:
            return
        self.set_state(show_details=not self._state.show_details)
        self._render()

    async def _on_sort(self, sort_key: SortKey) -> None:
        if self._state.modal_open:
            return
        self.set_state(sort_by=sort_key)
        self.apply_sorting()
        self._render()

    async def _on_help(self) -> None:
        self.set_state(show_help=not self._state.show_help)
        self._render()

    async def _on_escape(self) -> None:
        state = self._state
        if state.searching:
            self.set_state(searching=False, filter="")
            self.clear_filtered_ports_cache()
        elif state.show_help:
            self.set_state(show_help=False)
        elif state.show_confirm:
            self.set_state(show_confirm=False, confirm_action=None, confirm_message=None)
        elif state.show_logs:
            self.set_state(show_logs=False, logs_content=None)
        elif state.show_command:
            self.set_state(show_command=False, command_content=None)
        else:
            return
        self._render()

    async def _on_enter(self) -> None:
        state = self._state
        if state.searching:
            self.set_state(searching=False)
            self.clear_filtered_ports_cache()
            self._render()
        elif state.show_confirm and state.confirm_action is not None:
            action = state.confirm_action
            self.set_state(show_confirm=False, confirm_action=None, confirm_message=None)
            await action()
            self._render()

    # Actions

    async def kill_selected(self) -> None:
        selected = self.get_selected_port()
        if selected is None:
            return
        await self._kill(selected[0])

    async def _kill(self, port: PortInfo) -> None:
        if self._state.is_killing:
            self.logger.debug("kill_ignored", port=port.port, reason="kill_in_progress")
            return

        self.set_state(
            is_killing=True,
            killing_port=port.port,
            status_message=f"Killing PID {port.pid} on port {port.port}...",
        )
        self._render()

        killed = False
        try:
            try:
                killed = await kill_port(self._adapter, port, force=False)
            except Exception as e:
                self.logger.error("kill_action_failed", port=port.port, pid=port.pid, error=str(e))

            self.clear_filtered_ports_cache()
            self.clear_detector_cache()
            # Give the OS time to release the socket before re-detecting
            await self._sleep(self._kill_grace_seconds)
            await self.refresh()
            self._render()
        finally:
            if killed:
                message = f"Killed PID {port.pid} on port {port.port}"
            else:
                message = f"Failed to kill PID {port.pid} on port {port.port}"
            self.set_state(is_killing=False, killing_port=None, status_message=message)
            self._render()

    async def copy_selected(self) -> None:
        selected = self.get_selected_port()
        if selected is None:
            return
        port, _ = selected

        try:
            await self._clipboard(get_full_command(port))
        except Exception as e:
            self.logger.warning("copy_failed", pid=port.pid, error=str(e))
            self.set_state(status_message=f"Copy failed: {e}")
        else:
            self.set_state(status_message=f"Copied command of PID {port.pid}")
        self._render()

    async def view_command(self) -> None:
        selected = self.get_selected_port()
        if selected is None:
            return
        port, _ = selected

        self.set_state(show_command=True, command_content=COMMAND_PLACEHOLDER)
        self._render()

        # Stored commands may be truncated; ask the adapter for the full one
        try:
            content = await self._adapter.get_process_command(port.pid) or get_full_command(port)
        except Exception as e:
            self.logger.debug("command_lookup_failed", pid=port.pid, error=str(e))
            content = get_full_command(port)

        if self._state.show_command:
            self.set_state(command_content=content)
        self._render()

    async def view_logs(self) -> None:
        selected = self.get_selected_port()
        if selected is None:
            return
        port, _ = selected

        try:
            logs = await self._log_source(port)
        except Exception as e:
            self.logger.warning("logs_unavailable", pid=port.pid, error=str(e))
            logs = None

        self.set_state(show_logs=True, logs_content=logs or NO_LOGS_PLACEHOLDER)
        self._render()
