"""Platform adapters for port and process queries."""

from portwatch.adapters.base import BasePlatformAdapter
from portwatch.adapters.factory import (
    PlatformKind,
    create_platform_adapter,
    detect_platform_kind,
    get_platform_adapter,
    is_unix,
    is_windows,
)
from portwatch.adapters.unix import UnixPlatformAdapter
from portwatch.adapters.windows import WindowsPlatformAdapter

__all__ = [
    "BasePlatformAdapter",
    "PlatformKind",
    "create_platform_adapter",
    "detect_platform_kind",
    "get_platform_adapter",
    "is_unix",
    "is_windows",
    "UnixPlatformAdapter",
    "WindowsPlatformAdapter",
]
