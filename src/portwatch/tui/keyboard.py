"""Symbolic keyboard shortcuts and their key bindings."""

import curses
from collections.abc import Iterable, Mapping
from enum import Enum

from portwatch.core.exceptions import ConfigurationError


class Shortcut(str, Enum):
    """Dashboard commands, independent of the keys bound to them."""

    QUIT = "quit"
    UP = "up"
    DOWN = "down"
    SEARCH = "search"
    KILL = "kill"
    COPY = "copy"
    VIEW_COMMAND = "view_command"
    VIEW_LOGS = "view_logs"
    TOGGLE_GROUP = "toggle_group"
    TOGGLE_DETAILS = "toggle_details"
    SORT_PORT = "sort_port"
    SORT_PROCESS = "sort_process"
    SORT_PID = "sort_pid"
    HELP = "help"
    ESCAPE = "escape"
    ENTER = "enter"


DEFAULT_KEY_BINDINGS: dict[Shortcut, tuple[str, ...]] = {
    Shortcut.QUIT: ("q",),
    Shortcut.UP: ("up", "k"),
    Shortcut.DOWN: ("down", "j"),
    Shortcut.SEARCH: ("/",),
    Shortcut.KILL: ("x",),
    Shortcut.COPY: ("c",),
    Shortcut.VIEW_COMMAND: ("v",),
    Shortcut.VIEW_LOGS: ("l",),
    Shortcut.TOGGLE_GROUP: ("space",),
    Shortcut.TOGGLE_DETAILS: ("d",),
    Shortcut.SORT_PORT: ("1",),
    Shortcut.SORT_PROCESS: ("2",),
    Shortcut.SORT_PID: ("3",),
    Shortcut.HELP: ("?",),
    Shortcut.ESCAPE: ("escape",),
    Shortcut.ENTER: ("enter",),
}

SHORTCUT_DESCRIPTIONS: dict[Shortcut, str] = {
    Shortcut.QUIT: "Quit",
    Shortcut.UP: "Move selection up",
    Shortcut.DOWN: "Move selection down",
    Shortcut.SEARCH: "Filter ports",
    Shortcut.KILL: "Kill selected process",
    Shortcut.COPY: "Copy command line",
    Shortcut.VIEW_COMMAND: "View full command",
    Shortcut.VIEW_LOGS: "View logs",
    Shortcut.TOGGLE_GROUP: "Collapse/expand group",
    Shortcut.TOGGLE_DETAILS: "Toggle details pane",
    Shortcut.SORT_PORT: "Sort by port",
    Shortcut.SORT_PROCESS: "Sort by process",
    Shortcut.SORT_PID: "Sort by PID",
    Shortcut.HELP: "Toggle help",
    Shortcut.ESCAPE: "Close dialog / cancel search",
    Shortcut.ENTER: "Apply search / confirm",
}

_SPECIAL_KEYS: dict[int, str] = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_RESIZE: "resize",
    8: "backspace",
    10: "enter",
    13: "enter",
    27: "escape",
    32: "space",
    127: "backspace",
}


def key_name(code: int) -> str | None:
    """Normalise a curses key code to a binding name."""
    if code in _SPECIAL_KEYS:
        return _SPECIAL_KEYS[code]
    if 32 < code < 0x110000:
        char = chr(code)
        if char.isprintable():
            return char
    return None


class KeyMap:
    """Resolves key names to exactly one shortcut."""

    def __init__(self, bindings: Mapping[Shortcut, Iterable[str]]) -> None:
        self._by_key: dict[str, Shortcut] = {}
        self._by_shortcut: dict[Shortcut, list[str]] = {}

        for shortcut, keys in bindings.items():
            for key in keys:
                bound = self._by_key.get(key)
                if bound is not None and bound is not shortcut:
                    raise ConfigurationError(
                        f"Key '{key}' is bound to both {bound.value} and {shortcut.value}",
                        details={"key": key},
                    )
                self._by_key[key] = shortcut
                self._by_shortcut.setdefault(shortcut, []).append(key)

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, Iterable[str]] | None = None) -> "KeyMap":
        """Default bindings with some shortcuts rebound by name."""
        bindings: dict[Shortcut, tuple[str, ...]] = dict(DEFAULT_KEY_BINDINGS)
        for name, keys in (overrides or {}).items():
            try:
                shortcut = Shortcut(name)
            except ValueError as e:
                raise ConfigurationError(
                    f"Unknown shortcut '{name}'",
                    details={"valid": [s.value for s in Shortcut]},
                ) from e
            bindings[shortcut] = tuple(keys)
        return cls(bindings)

    def resolve(self, key: str) -> Shortcut | None:
        return self._by_key.get(key)

    def keys_for(self, shortcut: Shortcut) -> list[str]:
        return list(self._by_shortcut.get(shortcut, []))
