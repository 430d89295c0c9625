"""Tests for preset loading."""

import json

import pytest

from portwatch.core.exceptions import ConfigurationError
from portwatch.ports.presets import (
    DEFAULT_TYPE_PRESETS,
    load_type_presets,
    resolve_type_presets,
)


def test_default_presets_end_with_fallback():
    fallback = DEFAULT_TYPE_PRESETS[-1]
    assert fallback.name == "other"
    assert fallback.is_fallback
    assert fallback.priority == 0
    assert all(not p.is_fallback for p in DEFAULT_TYPE_PRESETS[:-1])


def test_resolve_without_file_returns_defaults():
    assert [p.name for p in resolve_type_presets(None)] == [p.name for p in DEFAULT_TYPE_PRESETS]


def test_load_camel_case_file(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({
        "types": [
            {
                "name": "queue",
                "ports": [5672],
                "portRanges": [{"min": 15670, "max": 15680}],
                "processPatterns": ["rabbitmq"],
                "priority": 12,
            },
            {"name": "other", "priority": 0},
        ]
    }))

    presets = load_type_presets(path)
    assert presets[0].name == "queue"
    assert presets[0].port_ranges[0].contains(15675)
    assert presets[0].process_patterns == ["rabbitmq"]
    assert presets[1].is_fallback


def test_invalid_range_rejected(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"types": [{"name": "x", "portRanges": [{"min": 10, "max": 5}]}]}))
    with pytest.raises(ConfigurationError):
        load_type_presets(path)


def test_empty_file_rejected(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"types": []}))
    with pytest.raises(ConfigurationError):
        load_type_presets(path)


def test_missing_file_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_type_presets(tmp_path / "nope.json")
