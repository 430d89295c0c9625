"""Actions the dashboard and CLI perform on a selected port."""

import asyncio
import shutil
import sys

from portwatch.core.exceptions import ActionError
from portwatch.core.interfaces import IPlatformAdapter
from portwatch.core.logging import get_logger
from portwatch.models import PortInfo
from portwatch.utils.process import get_process_logs, kill_process

logger = get_logger("port_actions")

# Tried in order on Linux and the BSDs
_UNIX_CLIPBOARD_TOOLS: list[list[str]] = [
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
]


def get_full_command(port: PortInfo) -> str:
    """Stored command line, or the process name when it is empty."""
    return port.command or port.process_name


async def kill_port(adapter: IPlatformAdapter, port: PortInfo, force: bool = False) -> bool:
    """Kill the process listening on a port."""
    logger.info("kill_requested", port=port.port, pid=port.pid, force=force)
    killed = await kill_process(adapter, port.pid, force)
    logger.info("kill_finished", port=port.port, pid=port.pid, killed=killed)
    return killed


def clipboard_command(platform: str | None = None) -> list[str] | None:
    """Command that reads stdin into the system clipboard, if any exists."""
    platform = platform or sys.platform
    if platform == "win32":
        return ["clip"]
    if platform == "darwin":
        return ["pbcopy"]
    for tool in _UNIX_CLIPBOARD_TOOLS:
        if shutil.which(tool[0]):
            return tool
    return None


async def copy_command_to_clipboard(text: str) -> None:
    """Copy text to the system clipboard."""
    command = clipboard_command()
    if command is None:
        raise ActionError("No clipboard tool found", action="copy")

    try:
        proc = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        await proc.communicate(text.encode("utf-8"))
    except OSError as e:
        raise ActionError(f"Clipboard tool failed: {e}", action="copy") from e

    if proc.returncode != 0:
        raise ActionError(
            f"{command[0]} exited with status {proc.returncode}",
            action="copy",
        )


async def view_port_logs(adapter: IPlatformAdapter, port: PortInfo) -> str | None:
    """Log text for the process on a port, or None if nothing is available."""
    logs = await get_process_logs(adapter, port.pid)
    if logs is None:
        return None

    text = logs["stdout"]
    if logs["stderr"]:
        text = f"{text}\n\n{logs['stderr']}"
    return text or None
