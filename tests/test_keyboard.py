"""Tests for key bindings."""

import curses

import pytest

from portwatch.core.exceptions import ConfigurationError
from portwatch.tui.keyboard import DEFAULT_KEY_BINDINGS, KeyMap, Shortcut, key_name


def test_every_shortcut_has_a_default_binding():
    assert set(DEFAULT_KEY_BINDINGS) == set(Shortcut)


def test_default_resolution():
    key_map = KeyMap.from_overrides()
    assert key_map.resolve("q") is Shortcut.QUIT
    assert key_map.resolve("up") is Shortcut.UP
    assert key_map.resolve("j") is Shortcut.DOWN
    assert key_map.resolve("escape") is Shortcut.ESCAPE
    assert key_map.resolve("z") is None


def test_override_replaces_keys():
    key_map = KeyMap.from_overrides({"kill": ["K"]})
    assert key_map.resolve("K") is Shortcut.KILL
    assert key_map.resolve("x") is None
    assert key_map.keys_for(Shortcut.KILL) == ["K"]


def test_unknown_shortcut_rejected():
    with pytest.raises(ConfigurationError):
        KeyMap.from_overrides({"explode": ["e"]})


def test_key_bound_twice_rejected():
    with pytest.raises(ConfigurationError):
        KeyMap.from_overrides({"kill": ["q"]})


@pytest.mark.parametrize(
    ("code", "name"),
    [
        (curses.KEY_UP, "up"),
        (curses.KEY_DOWN, "down"),
        (10, "enter"),
        (27, "escape"),
        (127, "backspace"),
        (32, "space"),
        (ord("x"), "x"),
        (ord("/"), "/"),
        (1, None),
    ],
)
def test_key_name(code, name):
    assert key_name(code) == name
