"""Abstract interfaces for platform adapters and caches."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from portwatch.models import PortInfo, ProcessInfo

K = TypeVar("K")
V = TypeVar("V")


class IPlatformAdapter(ABC):
    """OS-specific port and process operations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Adapter name."""
        ...

    @abstractmethod
    async def detect_ports(self) -> list[PortInfo]:
        """Detect all listening ports."""
        ...

    @abstractmethod
    async def get_process_info(self, pid: int) -> ProcessInfo:
        """Get command line and working directory of a process."""
        ...

    @abstractmethod
    async def get_process_lifetime(self, pid: int) -> int | None:
        """Get process uptime in seconds, if known."""
        ...

    @abstractmethod
    async def kill_process(self, pid: int, force: bool = False) -> bool:
        """Terminate a process. Never raises; returns False on failure."""
        ...

    @abstractmethod
    async def get_process_command(self, pid: int) -> str:
        """Get the full command line of a process."""
        ...


class ICache(ABC, Generic[K, V]):
    """Caching interface."""

    @abstractmethod
    def get(self, key: K) -> V | None:
        """Get value from cache."""
        ...

    @abstractmethod
    def set(self, key: K, value: V) -> None:
        """Set value in cache."""
        ...

    @abstractmethod
    def has(self, key: K) -> bool:
        """Check if key exists in cache and is fresh."""
        ...

    @abstractmethod
    def delete(self, key: K) -> None:
        """Delete value from cache."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Clear all cached values."""
        ...

    @abstractmethod
    def cleanup(self) -> int:
        """Drop expired entries and enforce the size bound."""
        ...

    @abstractmethod
    def size(self) -> int:
        """Number of stored entries."""
        ...
