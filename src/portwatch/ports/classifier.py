"""Priority-ordered port type classification."""

from collections.abc import Sequence

from portwatch.models import PortCategory, PortInfo, TypePreset
from portwatch.ports.presets import DEFAULT_TYPE_PRESETS

DEFAULT_CATEGORY = PortCategory.OTHER.value


def _contains_any(text: str, patterns: Sequence[str] | None) -> bool:
    if not patterns or not text:
        return False
    text = text.lower()
    return any(pattern.lower() in text for pattern in patterns)


def preset_matches(preset: TypePreset, port: PortInfo) -> bool:
    """Whether any of the preset's criteria match the port."""
    if preset.is_fallback:
        return True
    if preset.ports and port.port in preset.ports:
        return True
    if preset.port_ranges and any(r.contains(port.port) for r in preset.port_ranges):
        return True
    if _contains_any(port.command, preset.command_patterns):
        return True
    return _contains_any(port.process_name, preset.process_patterns)


class TypeClassifier:
    """Assigns each port the category of the first matching preset.

    Presets are evaluated by descending priority; equal priorities keep
    declaration order. Ports matching nothing are ``other``.
    """

    def __init__(self, presets: Sequence[TypePreset] | None = None) -> None:
        presets = DEFAULT_TYPE_PRESETS if presets is None else presets
        self._presets = sorted(presets, key=lambda preset: -preset.priority)

    @property
    def presets(self) -> list[TypePreset]:
        return list(self._presets)

    def detect_type(self, port: PortInfo) -> str:
        for preset in self._presets:
            if preset_matches(preset, port):
                return preset.name
        return DEFAULT_CATEGORY
