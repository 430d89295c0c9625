"""Port detection, classification and grouping."""

from portwatch.ports.classifier import DEFAULT_CATEGORY, TypeClassifier, preset_matches
from portwatch.ports.organizer import (
    CATEGORY_NAMES,
    PortOrganizer,
    get_category_name,
)
from portwatch.ports.presets import (
    DEFAULT_TYPE_PRESETS,
    load_type_presets,
    resolve_type_presets,
)
from portwatch.ports.pipeline import create_organizer, create_registry, detect_and_organize
from portwatch.ports.registry import PortRegistry, deduplicate_ports

__all__ = [
    "DEFAULT_CATEGORY",
    "TypeClassifier",
    "preset_matches",
    "CATEGORY_NAMES",
    "PortOrganizer",
    "get_category_name",
    "DEFAULT_TYPE_PRESETS",
    "load_type_presets",
    "resolve_type_presets",
    "PortRegistry",
    "deduplicate_ports",
    "create_organizer",
    "create_registry",
    "detect_and_organize",
]
