"""Port actions."""

from portwatch.actions.port_actions import (
    copy_command_to_clipboard,
    get_full_command,
    kill_port,
    view_port_logs,
)

__all__ = [
    "copy_command_to_clipboard",
    "get_full_command",
    "kill_port",
    "view_port_logs",
]
