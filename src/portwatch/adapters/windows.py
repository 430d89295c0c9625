"""Windows platform adapter."""

import asyncio
import subprocess
from collections.abc import Iterable

from portwatch.adapters.base import BasePlatformAdapter


class WindowsPlatformAdapter(BasePlatformAdapter):
    """Terminates process trees with taskkill."""

    @property
    def name(self) -> str:
        return "windows"

    def format_command(self, cmdline: Iterable[str]) -> str:
        return subprocess.list2cmdline(list(cmdline))

    async def kill_process(self, pid: int, force: bool = False) -> bool:
        args = ["taskkill", "/PID", str(pid), "/T"]
        if force:
            args.append("/F")

        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await proc.communicate()
        except OSError as e:
            self.logger.warning("kill_failed", pid=pid, force=force, error=str(e))
            return False

        if proc.returncode != 0:
            self.logger.warning(
                "kill_failed",
                pid=pid,
                force=force,
                error=stderr.decode(errors="ignore").strip(),
            )
            return False

        self.logger.info("taskkill_succeeded", pid=pid, force=force)
        return True
