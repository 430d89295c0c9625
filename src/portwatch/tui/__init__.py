"""Terminal dashboard."""

from portwatch.tui.controller import DashboardController, DisplayRow
from portwatch.tui.keyboard import DEFAULT_KEY_BINDINGS, KeyMap, Shortcut, key_name

__all__ = [
    "DashboardController",
    "DisplayRow",
    "DEFAULT_KEY_BINDINGS",
    "KeyMap",
    "Shortcut",
    "key_name",
]
