"""Port registry: deduplication and short-lived caching of detection passes."""

import time
from collections.abc import Callable, Iterable

from portwatch.adapters.factory import get_platform_adapter
from portwatch.core.config import get_settings
from portwatch.core.interfaces import IPlatformAdapter
from portwatch.core.logging import get_logger
from portwatch.models import PortInfo, TransportProtocol


def deduplicate_ports(ports: Iterable[PortInfo]) -> list[PortInfo]:
    """Collapse entries sharing port and pid into one listener.

    The first entry seen for a key is kept, except that a TCP entry
    replaces an earlier UDP one. Output follows first-seen order.
    """
    seen: dict[str, PortInfo] = {}

    for port in ports:
        existing = seen.get(port.key)
        if existing is None:
            seen[port.key] = port
        elif (
            port.protocol is TransportProtocol.TCP
            and existing.protocol is TransportProtocol.UDP
        ):
            seen[port.key] = port

    return list(seen.values())


class PortRegistry:
    """Wraps a platform adapter with deduplication and a freshness window."""

    def __init__(
        self,
        adapter: IPlatformAdapter | None = None,
        freshness_window: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.logger = get_logger("port_registry")
        self._adapter = adapter or get_platform_adapter()
        self._freshness_window = (
            freshness_window
            if freshness_window is not None
            else get_settings().freshness_window_seconds
        )
        self._clock = clock
        self._cache: dict[str, PortInfo] = {}
        self._snapshot: list[PortInfo] | None = None
        self._last_update: float | None = None
        self._last_port_count = 0

    @property
    def adapter(self) -> IPlatformAdapter:
        return self._adapter

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def _is_fresh(self, now: float) -> bool:
        return (
            self._snapshot is not None
            and self._last_update is not None
            and now - self._last_update < self._freshness_window
        )

    async def detect_ports(self) -> list[PortInfo]:
        """Get all listening ports, hitting the adapter only when stale.

        Falls back to cached entries, however old, when the adapter
        fails. Raises the adapter's error if nothing is cached.
        """
        now = self._clock()
        if self._is_fresh(now):
            return list(self._snapshot or [])

        try:
            raw_ports = await self._adapter.detect_ports()
        except Exception as e:
            if self._cache:
                self.logger.warning(
                    "using_stale_port_cache",
                    error=str(e),
                    cached=len(self._cache),
                )
                return list(self._cache.values())
            self.logger.error("port_detection_failed", error=str(e))
            raise

        deduplicated = deduplicate_ports(raw_ports)

        # A changed count means listeners came or went; drop everything
        if len(deduplicated) != self._last_port_count:
            self._cache.clear()
            self._last_port_count = len(deduplicated)

        for port in deduplicated:
            self._cache[port.key] = port

        self._snapshot = deduplicated
        self._last_update = now
        self.logger.debug(
            "ports_refreshed",
            raw=len(raw_ports),
            deduplicated=len(deduplicated),
        )
        return list(deduplicated)

    def clear_cache(self) -> None:
        """Forget cached ports so the next call queries the adapter."""
        self._cache.clear()
        self._snapshot = None
        self._last_update = None
