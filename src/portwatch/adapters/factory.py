"""Platform adapter selection."""

import sys
from enum import Enum
from functools import lru_cache

from portwatch.adapters.base import BasePlatformAdapter
from portwatch.adapters.unix import UnixPlatformAdapter
from portwatch.adapters.windows import WindowsPlatformAdapter
from portwatch.core.interfaces import IPlatformAdapter


class PlatformKind(str, Enum):
    """Supported adapter variants."""

    WINDOWS = "windows"
    UNIX = "unix"


_ADAPTERS: dict[PlatformKind, type[BasePlatformAdapter]] = {
    PlatformKind.WINDOWS: WindowsPlatformAdapter,
    PlatformKind.UNIX: UnixPlatformAdapter,
}


def detect_platform_kind(platform: str | None = None) -> PlatformKind:
    """Map an OS identifier (``sys.platform`` style) to an adapter variant."""
    platform = platform or sys.platform
    if platform == "win32":
        return PlatformKind.WINDOWS
    # darwin, linux and the BSDs
    return PlatformKind.UNIX


def create_platform_adapter(kind: PlatformKind) -> IPlatformAdapter:
    """Instantiate the adapter for a platform variant."""
    return _ADAPTERS[kind]()


@lru_cache(maxsize=1)
def get_platform_adapter() -> IPlatformAdapter:
    """Get the adapter for the running OS, chosen once per process."""
    return create_platform_adapter(detect_platform_kind())


def is_windows() -> bool:
    return detect_platform_kind() is PlatformKind.WINDOWS


def is_unix() -> bool:
    return detect_platform_kind() is PlatformKind.UNIX
