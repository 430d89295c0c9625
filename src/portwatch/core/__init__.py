"""Core module - configuration, logging, and interfaces."""

from portwatch.core.config import Settings, get_settings
from portwatch.core.exceptions import (
    PortwatchError,
    AdapterError,
    ProcessNotFoundError,
    ActionError,
    ConfigurationError,
)

__all__ = [
    "Settings",
    "get_settings",
    "PortwatchError",
    "AdapterError",
    "ProcessNotFoundError",
    "ActionError",
    "ConfigurationError",
]
