"""Pydantic data models for Portwatch."""

from portwatch.models.base import BaseSchema, PortCategory, TransportProtocol
from portwatch.models.ports import PortInfo, PortGroup, PortDetectionResult
from portwatch.models.presets import PortRange, TypePreset, TypePresetsConfig
from portwatch.models.process import ProcessInfo, ProcessDetails
from portwatch.models.dashboard import DashboardState, SortKey

__all__ = [
    "BaseSchema",
    "PortCategory",
    "TransportProtocol",
    "PortInfo",
    "PortGroup",
    "PortDetectionResult",
    "PortRange",
    "TypePreset",
    "TypePresetsConfig",
    "ProcessInfo",
    "ProcessDetails",
    "DashboardState",
    "SortKey",
]
