"""Unix-like (Linux, macOS, BSD) platform adapter."""

import asyncio
import shlex
from collections.abc import Iterable

import psutil

from portwatch.adapters.base import BasePlatformAdapter


class UnixPlatformAdapter(BasePlatformAdapter):
    """Signals processes with SIGTERM, or SIGKILL when forced."""

    @property
    def name(self) -> str:
        return "unix"

    def format_command(self, cmdline: Iterable[str]) -> str:
        return shlex.join(cmdline)

    async def kill_process(self, pid: int, force: bool = False) -> bool:
        def send() -> None:
            proc = psutil.Process(pid)
            if force:
                proc.kill()
            else:
                proc.terminate()

        try:
            await asyncio.to_thread(send)
        except psutil.NoSuchProcess:
            self.logger.info("kill_target_missing", pid=pid)
            return False
        except psutil.Error as e:
            self.logger.warning("kill_failed", pid=pid, force=force, error=str(e))
            return False

        self.logger.info("kill_signal_sent", pid=pid, signal="SIGKILL" if force else "SIGTERM")
        return True
