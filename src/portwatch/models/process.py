"""Process information models."""

from pydantic import Field

from portwatch.models.base import BaseSchema


class ProcessInfo(BaseSchema):
    """Command line and working directory of a process."""

    command: str
    cwd: str | None = None


class ProcessDetails(BaseSchema):
    """Detailed process information."""

    pid: int
    name: str = ""
    command: str = ""
    memory: float = Field(default=0.0, description="Resident memory in KB")
    cpu: float = Field(default=0.0, description="CPU usage percentage")
    cwd: str | None = None
