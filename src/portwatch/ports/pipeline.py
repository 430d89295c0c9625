"""Wiring of registry, classifier and organizer from settings."""

from portwatch.core.config import Settings, get_settings
from portwatch.core.interfaces import IPlatformAdapter
from portwatch.models import PortDetectionResult
from portwatch.ports.classifier import TypeClassifier
from portwatch.ports.organizer import PortOrganizer
from portwatch.ports.presets import resolve_type_presets
from portwatch.ports.registry import PortRegistry


def create_organizer(settings: Settings | None = None) -> PortOrganizer:
    settings = settings or get_settings()
    presets = resolve_type_presets(settings.type_presets_file)
    return PortOrganizer(TypeClassifier(presets))


def create_registry(
    settings: Settings | None = None,
    adapter: IPlatformAdapter | None = None,
) -> PortRegistry:
    settings = settings or get_settings()
    return PortRegistry(
        adapter=adapter,
        freshness_window=settings.freshness_window_seconds,
    )


async def detect_and_organize(
    registry: PortRegistry,
    organizer: PortOrganizer,
) -> PortDetectionResult:
    """Run one detection pass and return the grouped result."""
    ports = await registry.detect_ports()
    return organizer.process_ports(ports)
