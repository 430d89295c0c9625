"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from portwatch.core.exceptions import AdapterError, ProcessNotFoundError
from portwatch.core.interfaces import IPlatformAdapter
from portwatch.models import PortInfo, ProcessInfo, TransportProtocol


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAdapter(IPlatformAdapter):
    """In-memory adapter recording every call."""

    def __init__(self, ports: list[PortInfo] | None = None) -> None:
        self.ports = list(ports or [])
        self.detect_calls = 0
        self.detect_error: Exception | None = None
        self.killed: list[tuple[int, bool]] = []
        self.kill_result = True
        self.kill_error: Exception | None = None
        self.on_kill: Callable[[], None] | None = None
        self.commands: dict[int, str] = {}
        self.command_error: Exception | None = None

    @property
    def name(self) -> str:
        return "fake"

    async def detect_ports(self) -> list[PortInfo]:
        self.detect_calls += 1
        if self.detect_error is not None:
            raise self.detect_error
        return list(self.ports)

    async def get_process_info(self, pid: int) -> ProcessInfo:
        if pid not in self.commands:
            raise ProcessNotFoundError(f"Process {pid} not found", pid=pid)
        return ProcessInfo(command=self.commands[pid], cwd="/srv/app")

    async def get_process_lifetime(self, pid: int) -> int | None:
        return 42

    async def kill_process(self, pid: int, force: bool = False) -> bool:
        self.killed.append((pid, force))
        if self.on_kill is not None:
            self.on_kill()
        if self.kill_error is not None:
            raise self.kill_error
        if self.kill_result:
            self.ports = [p for p in self.ports if p.pid != pid]
        return self.kill_result

    async def get_process_command(self, pid: int) -> str:
        if self.command_error is not None:
            raise self.command_error
        if pid not in self.commands:
            raise AdapterError(f"No command for {pid}", operation="get_process_command", pid=pid)
        return self.commands[pid]


def build_port(
    port: int = 45678,
    pid: int = 100,
    protocol: TransportProtocol = TransportProtocol.TCP,
    process_name: str = "foo",
    command: str = "/opt/foo/bin/foo --flag",
    **extra,
) -> PortInfo:
    return PortInfo(
        port=port,
        pid=pid,
        protocol=protocol,
        process_name=process_name,
        command=command,
        user="alice",
        **extra,
    )


@pytest.fixture
def make_port() -> Callable[..., PortInfo]:
    """Factory for PortInfo instances with neutral defaults."""
    return build_port


@pytest.fixture
def clock() -> FakeClock:
    """Manually advanced clock."""
    return FakeClock()


@pytest.fixture
def sample_ports() -> list[PortInfo]:
    """A dev server, a database and an SSH daemon."""
    return [
        build_port(3000, pid=300, process_name="node", command="node server.js"),
        build_port(5432, pid=500, process_name="postgres", command="postgres -D /var/lib/postgresql/data"),
        build_port(22, pid=22, process_name="sshd", command="/usr/sbin/sshd -D"),
    ]


@pytest.fixture
def fake_adapter(sample_ports: list[PortInfo]) -> FakeAdapter:
    """Fake adapter reporting the sample ports."""
    adapter = FakeAdapter(sample_ports)
    adapter.commands = {p.pid: f"{p.command} --full" for p in sample_ports}
    return adapter
