"""Curses painting of the dashboard state."""

import curses
import textwrap

from portwatch.models import PortCategory, PortInfo
from portwatch.tui.controller import DashboardController, DisplayRow
from portwatch.tui.keyboard import SHORTCUT_DESCRIPTIONS, Shortcut
from portwatch.utils.formatting import format_cpu, format_lifetime, format_memory


class Colors:
    """Color pair ids."""

    NORMAL = 0
    HEADER = 1
    GROUP = 2
    WARNING = 3
    ERROR = 4
    MUTED = 5
    SELECTED = 6

    @staticmethod
    def init() -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(Colors.HEADER, curses.COLOR_CYAN, background)
        curses.init_pair(Colors.GROUP, curses.COLOR_GREEN, background)
        curses.init_pair(Colors.WARNING, curses.COLOR_YELLOW, background)
        curses.init_pair(Colors.ERROR, curses.COLOR_RED, background)
        curses.init_pair(Colors.MUTED, curses.COLOR_BLUE, background)
        curses.init_pair(Colors.SELECTED, curses.COLOR_BLACK, curses.COLOR_CYAN)


def _port_line(port: PortInfo, width: int) -> str:
    line = (
        f"  {port.port:>5}  {port.protocol.value:<3}  {port.pid:>7}  "
        f"{port.process_name[:18]:<18}  {port.user[:10]:<10}  {port.command}"
    )
    return line[:width]


class DashboardRenderer:
    """Paints a controller's state onto a curses screen."""

    def __init__(self, screen: "curses.window", controller: DashboardController) -> None:
        self.screen = screen
        self.controller = controller
        self._scroll = 0

    def draw(self) -> None:
        self.screen.erase()
        height, width = self.screen.getmaxyx()
        if height < 5 or width < 20:
            self._addstr(0, 0, "Terminal too small", Colors.WARNING)
            self.screen.refresh()
            return

        state = self.controller.state
        columns_y = 1
        if state.error:
            self._addstr(1, 0, f" {state.error} "[:width], Colors.ERROR, bold=True)
            columns_y = 2
        self._draw_header(width, columns_y)
        top = columns_y + 1

        details_height = 7 if state.show_details else 0
        list_height = max(1, height - top - 1 - details_height)
        self._draw_rows(top, list_height, width)
        if state.show_details:
            self._draw_details(height - 1 - details_height, width)
        self._draw_footer(height - 1, width)
        self.screen.noutrefresh()

        if state.show_help:
            self._draw_help(height, width)
        elif state.show_confirm:
            self._draw_modal(
                "Confirm",
                f"{state.confirm_message or ''}\n\nEnter to confirm, Esc to cancel",
                height,
                width,
            )
        elif state.show_logs:
            self._draw_modal("Logs", state.logs_content or "", height, width)
        elif state.show_command:
            self._draw_modal("Command", state.command_content or "", height, width)

        curses.doupdate()

    def _draw_header(self, width: int, columns_y: int = 1) -> None:
        state = self.controller.state
        result = self.controller.result
        total = result.total_ports if result else 0
        title = f" portwatch | {total} listening | sort: {state.sort_by.value}"
        if state.filter:
            title += f" | filter: {state.filter}"
        self._addstr(0, 0, title.ljust(width)[:width], Colors.HEADER, bold=True)

        columns = f"  {'PORT':>5}  {'PRO':<3}  {'PID':>7}  {'PROCESS':<18}  {'USER':<10}  COMMAND"
        self._addstr(columns_y, 0, columns[:width], Colors.MUTED)

    def _draw_rows(self, top: int, height: int, width: int) -> None:
        rows = self.controller.rows
        if not rows:
            message = "Loading ports..." if self.controller.result is None else "No listening ports"
            self._addstr(top + 1, 2, message, Colors.MUTED)
            return

        selected = min(self.controller.state.selected_index, len(rows) - 1)
        if selected < self._scroll:
            self._scroll = selected
        elif selected >= self._scroll + height:
            self._scroll = selected - height + 1

        for offset, row in enumerate(rows[self._scroll:self._scroll + height]):
            index = self._scroll + offset
            self._draw_row(top + offset, row, width, index == selected)

    def _draw_row(self, y: int, row: DisplayRow, width: int, selected: bool) -> None:
        state = self.controller.state
        if row.port is None:
            marker = "+" if row.group.collapsed else "-"
            text = f"{marker} {row.group.name} ({len(row.group.ports)})"
            color = Colors.WARNING if row.group.type == PortCategory.UNEXPECTED.value else Colors.GROUP
            bold = True
        else:
            text = _port_line(row.port, width)
            if state.is_killing and state.killing_port == row.port.port:
                text = f"{text[:max(0, width - 12)]}  killing..."
            color = Colors.NORMAL
            bold = False

        if selected:
            self._addstr(y, 0, text.ljust(width)[:width], Colors.SELECTED, bold=True)
        else:
            self._addstr(y, 0, text[:width], color, bold=bold)

    def _draw_details(self, y: int, width: int) -> None:
        self._addstr(y, 0, "-" * width, Colors.MUTED)
        selected = self.controller.get_selected_port()
        if selected is None:
            self._addstr(y + 1, 2, "Select a port to see details", Colors.MUTED)
            return

        port, group = selected
        lines = [
            f"Port {port.port}/{port.protocol.value}  [{group.name}]  PID {port.pid}  user {port.user or '-'}",
            f"Memory {format_memory(port.memory)}  CPU {format_cpu(port.cpu)}  "
            f"Uptime {format_lifetime(port.lifetime)}",
            f"CWD {port.cwd or '-'}",
            f"CMD {port.command or '-'}",
        ]
        for offset, line in enumerate(lines, start=1):
            self._addstr(y + offset, 2, line[:width - 2])

    def _draw_footer(self, y: int, width: int) -> None:
        state = self.controller.state
        if state.searching:
            self._addstr(y, 0, f"/{state.filter}_"[:width], Colors.HEADER, bold=True)
            return
        if state.status_message:
            color = Colors.WARNING if state.is_killing else Colors.NORMAL
            self._addstr(y, 0, state.status_message[:width], color)
            return

        key_map = self.controller.key_map
        hints = []
        for shortcut in (Shortcut.KILL, Shortcut.SEARCH, Shortcut.VIEW_COMMAND, Shortcut.HELP, Shortcut.QUIT):
            keys = key_map.keys_for(shortcut)
            if keys:
                hints.append(f"{keys[0]} {SHORTCUT_DESCRIPTIONS[shortcut].split()[0].lower()}")
        self._addstr(y, 0, "  ".join(hints)[:width], Colors.MUTED)

    def _draw_help(self, height: int, width: int) -> None:
        key_map = self.controller.key_map
        lines = []
        for shortcut in Shortcut:
            keys = ", ".join(key_map.keys_for(shortcut)) or "-"
            lines.append(f"{keys:<12} {SHORTCUT_DESCRIPTIONS[shortcut]}")
        self._draw_modal("Help", "\n".join(lines), height, width)

    def _draw_modal(self, title: str, content: str, height: int, width: int) -> None:
        box_width = max(20, min(width - 4, 100))
        inner = box_width - 4
        lines: list[str] = []
        for paragraph in content.splitlines() or [""]:
            lines.extend(textwrap.wrap(paragraph, inner) or [""])

        box_height = min(height - 2, len(lines) + 4)
        y0 = max(0, (height - box_height) // 2)
        x0 = max(0, (width - box_width) // 2)

        try:
            win = curses.newwin(box_height, box_width, y0, x0)
        except curses.error:
            return
        win.erase()
        win.box()
        try:
            win.addstr(0, 2, f" {title} ", curses.A_BOLD)
            for offset, line in enumerate(lines[:box_height - 4]):
                win.addstr(2 + offset, 2, line[:inner])
            win.addstr(box_height - 1, 2, " Esc to close "[:inner])
        except curses.error:
            pass
        win.noutrefresh()

    def _addstr(self, y: int, x: int, text: str, color: int = Colors.NORMAL, bold: bool = False) -> None:
        attr = curses.color_pair(color)
        if bold:
            attr |= curses.A_BOLD
        try:
            self.screen.addstr(y, x, text, attr)
        except curses.error:
            # Writing into the bottom-right cell raises after a successful write
            pass
