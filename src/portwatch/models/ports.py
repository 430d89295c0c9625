"""Port detection models."""

from datetime import datetime, timezone

from pydantic import ConfigDict, Field

from portwatch.models.base import BaseSchema, TransportProtocol


class PortInfo(BaseSchema):
    """A listening port and the process that owns it.

    Instances are immutable; every detection pass produces new ones and
    classification returns a copy with ``type`` filled in.
    """

    model_config = ConfigDict(frozen=True)

    port: int = Field(ge=1, le=65535)
    protocol: TransportProtocol = TransportProtocol.TCP
    pid: int = Field(ge=0)
    process_name: str = ""
    command: str = ""
    cwd: str | None = None
    user: str = ""
    memory: float | None = None  # KB
    cpu: float | None = None  # percent
    lifetime: int | None = None  # seconds
    type: str | None = None

    @property
    def key(self) -> str:
        """Identity of the logical listener, independent of protocol."""
        return f"{self.port}-{self.pid}"


class PortGroup(BaseSchema):
    """Ports sharing a category."""

    id: str
    name: str
    type: str
    ports: list[PortInfo] = Field(default_factory=list)
    collapsed: bool = False


class PortDetectionResult(BaseSchema):
    """Classified and grouped snapshot handed to the dashboard."""

    ports: list[PortInfo] = Field(default_factory=list)
    groups: list[PortGroup] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_ports(self) -> int:
        return len(self.ports)

    def find_port(self, port: int) -> list[PortInfo]:
        """All listeners bound to the given port number."""
        return [p for p in self.ports if p.port == port]
