"""Process helpers built on the platform adapter."""

from portwatch.core.interfaces import IPlatformAdapter
from portwatch.core.logging import get_logger
from portwatch.models import ProcessDetails

logger = get_logger("process_utils")

LOGS_UNAVAILABLE_NOTE = (
    "Note: Live logs are not available. "
    "Use the process command to view logs manually."
)


async def get_process_details(adapter: IPlatformAdapter, pid: int) -> ProcessDetails | None:
    """Get detailed process information, or None if the query fails."""
    try:
        info = await adapter.get_process_info(pid)
    except Exception as e:
        logger.debug("process_details_unavailable", pid=pid, error=str(e))
        return None

    # Memory and CPU are only reported on PortInfo by detection passes
    return ProcessDetails(pid=pid, command=info.command, cwd=info.cwd)


async def kill_process(adapter: IPlatformAdapter, pid: int, force: bool = False) -> bool:
    """Kill a process gracefully (or forcibly). Never raises."""
    try:
        return await adapter.kill_process(pid, force)
    except Exception as e:
        logger.warning("kill_process_failed", pid=pid, force=force, error=str(e))
        return False


async def get_process_logs(adapter: IPlatformAdapter, pid: int) -> dict[str, str] | None:
    """Get stdout/stderr text for a process, or None if unavailable."""
    try:
        command = await adapter.get_process_command(pid)
    except Exception as e:
        logger.debug("process_logs_unavailable", pid=pid, error=str(e))
        return None

    return {
        "stdout": f"Process: {command}\n\n{LOGS_UNAVAILABLE_NOTE}",
        "stderr": "",
    }
