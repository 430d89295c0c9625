"""Dashboard state model."""

from collections.abc import Awaitable, Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortKey(str, Enum):
    """Sort order applied to ports within each group."""

    PORT = "port"
    PROCESS = "process"
    PID = "pid"


class DashboardState(BaseModel):
    """Mutable state owned by the dashboard controller."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    running: bool = True
    selected_index: int = Field(default=0, ge=0)
    sort_by: SortKey = SortKey.PORT
    filter: str = ""
    searching: bool = False
    show_details: bool = False

    # Modals
    show_help: bool = False
    show_confirm: bool = False
    confirm_message: str | None = None
    confirm_action: Callable[[], Awaitable[None]] | None = None
    show_logs: bool = False
    logs_content: str | None = None
    show_command: bool = False
    command_content: str | None = None

    # Kill in progress
    is_killing: bool = False
    killing_port: int | None = None

    status_message: str | None = None
    error: str | None = None

    @property
    def modal_open(self) -> bool:
        return (
            self.show_help
            or self.show_confirm
            or self.show_logs
            or self.show_command
            or self.searching
        )
