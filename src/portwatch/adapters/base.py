"""Base platform adapter backed by psutil."""

import asyncio
import socket
import time
from abc import abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

import psutil

from portwatch.core.config import get_settings
from portwatch.core.exceptions import AdapterError, ProcessNotFoundError
from portwatch.core.interfaces import IPlatformAdapter
from portwatch.core.logging import get_logger
from portwatch.infrastructure.cache import TTLCache
from portwatch.models import PortInfo, ProcessInfo, TransportProtocol

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ProcessSnapshot:
    """Process attributes captured during a detection pass."""

    name: str
    cmdline: tuple[str, ...]
    cwd: str | None
    user: str
    memory: float | None
    create_time: float | None


def _safe(getter: Callable[[], T], default: T) -> T:
    """Read a single process attribute, tolerating permission errors."""
    try:
        return getter()
    except (psutil.AccessDenied, psutil.ZombieProcess):
        return default


class BasePlatformAdapter(IPlatformAdapter):
    """Shared psutil implementation for all platform variants."""

    def __init__(
        self,
        cache_timeout: float | None = None,
        cache_max_size: int | None = None,
    ) -> None:
        settings = get_settings()
        self.logger = get_logger(self.name)
        self._process_cache: TTLCache[int, ProcessSnapshot] = TTLCache(
            timeout=cache_timeout if cache_timeout is not None else settings.process_cache_ttl_seconds,
            max_size=cache_max_size if cache_max_size is not None else settings.process_cache_max_size,
        )
        # Long-lived handles; psutil measures CPU between calls on the same Process
        self._cpu_samplers: dict[int, psutil.Process] = {}

    @abstractmethod
    def format_command(self, cmdline: Iterable[str]) -> str:
        """Join argv the way the platform shell would."""
        ...

    @abstractmethod
    async def kill_process(self, pid: int, force: bool = False) -> bool:
        ...

    async def detect_ports(self) -> list[PortInfo]:
        """Detect listening TCP sockets and bound UDP sockets."""
        try:
            ports = await asyncio.to_thread(self._collect_ports)
        except (psutil.Error, OSError) as e:
            raise AdapterError(
                f"Failed to enumerate sockets: {e}",
                operation="detect_ports",
            ) from e

        self._process_cache.cleanup()
        self.logger.debug("ports_detected", count=len(ports))
        return ports

    async def get_process_info(self, pid: int) -> ProcessInfo:
        return await asyncio.to_thread(self._read_process_info, pid)

    async def get_process_lifetime(self, pid: int) -> int | None:
        create_time = await asyncio.to_thread(
            self._with_process, pid, "get_process_lifetime",
            lambda proc: _safe(proc.create_time, None),
        )
        if create_time is None:
            return None
        return max(0, int(time.time() - create_time))

    async def get_process_command(self, pid: int) -> str:
        return await asyncio.to_thread(
            self._with_process, pid, "get_process_command",
            lambda proc: self.format_command(proc.cmdline()) or proc.name(),
        )

    def _with_process(
        self,
        pid: int,
        operation: str,
        reader: Callable[[psutil.Process], T],
    ) -> T:
        try:
            proc = psutil.Process(pid)
            with proc.oneshot():
                return reader(proc)
        except psutil.NoSuchProcess as e:
            raise ProcessNotFoundError(
                f"Process {pid} not found",
                operation=operation,
                pid=pid,
            ) from e
        except psutil.Error as e:
            raise AdapterError(
                f"Failed to query process {pid}: {e}",
                operation=operation,
                pid=pid,
            ) from e

    def _read_process_info(self, pid: int) -> ProcessInfo:
        def read(proc: psutil.Process) -> ProcessInfo:
            command = self.format_command(_safe(proc.cmdline, [])) or proc.name()
            return ProcessInfo(command=command, cwd=_safe(proc.cwd, None) or None)

        return self._with_process(pid, "get_process_info", read)

    def _list_connections(self) -> list[tuple[Any, int | None]]:
        """Socket entries paired with their owning pid."""
        try:
            return [(conn, conn.pid) for conn in psutil.net_connections(kind="inet")]
        except psutil.AccessDenied:
            # macOS requires root for the system-wide table
            self.logger.debug("socket_table_denied", fallback="per_process")

        entries: list[tuple[Any, int | None]] = []
        for proc in psutil.process_iter():
            try:
                entries.extend((conn, proc.pid) for conn in proc.net_connections(kind="inet"))
            except (psutil.AccessDenied, psutil.NoSuchProcess, psutil.ZombieProcess):
                continue
        return entries

    @staticmethod
    def _listening_protocol(conn: Any) -> TransportProtocol | None:
        if conn.type == socket.SOCK_STREAM and conn.status == psutil.CONN_LISTEN:
            return TransportProtocol.TCP
        if conn.type == socket.SOCK_DGRAM and not conn.raddr:
            return TransportProtocol.UDP
        return None

    def _collect_ports(self) -> list[PortInfo]:
        ports: list[PortInfo] = []
        cpu_by_pid: dict[int, float | None] = {}
        now = time.time()

        for conn, pid in self._list_connections():
            protocol = self._listening_protocol(conn)
            if protocol is None or not pid or not conn.laddr:
                continue

            snapshot = self._snapshot(pid)
            if snapshot is None:
                continue

            lifetime = None
            if snapshot.create_time is not None:
                lifetime = max(0, int(now - snapshot.create_time))

            if pid not in cpu_by_pid:
                cpu_by_pid[pid] = self._sample_cpu(pid)

            ports.append(
                PortInfo(
                    port=conn.laddr.port,
                    protocol=protocol,
                    pid=pid,
                    process_name=snapshot.name,
                    command=self.format_command(snapshot.cmdline) or snapshot.name,
                    cwd=snapshot.cwd,
                    user=snapshot.user,
                    memory=snapshot.memory,
                    cpu=cpu_by_pid[pid],
                    lifetime=lifetime,
                )
            )

        for pid in set(self._cpu_samplers) - cpu_by_pid.keys():
            del self._cpu_samplers[pid]
        return ports

    def _sample_cpu(self, pid: int) -> float | None:
        """CPU percent since the previous pass, or None on a pid's first pass."""
        proc = self._cpu_samplers.get(pid)
        try:
            if proc is None or not proc.is_running():
                proc = psutil.Process(pid)
                # The first reading on a Process is always 0.0
                proc.cpu_percent(interval=None)
                self._cpu_samplers[pid] = proc
                return None
            return proc.cpu_percent(interval=None)
        except psutil.NoSuchProcess:
            self._cpu_samplers.pop(pid, None)
            return None
        except psutil.AccessDenied:
            return None

    def _snapshot(self, pid: int) -> ProcessSnapshot | None:
        cached = self._process_cache.get(pid)
        if cached is not None:
            return cached

        try:
            proc = psutil.Process(pid)
            with proc.oneshot():
                memory_info = _safe(proc.memory_info, None)
                snapshot = ProcessSnapshot(
                    name=_safe(proc.name, ""),
                    cmdline=tuple(_safe(proc.cmdline, [])),
                    cwd=_safe(proc.cwd, None) or None,
                    user=_safe(proc.username, ""),
                    memory=memory_info.rss / 1024 if memory_info else None,
                    create_time=_safe(proc.create_time, None),
                )
        except psutil.NoSuchProcess:
            return None

        self._process_cache.set(pid, snapshot)
        return snapshot
