"""Utility helpers."""

from portwatch.utils.formatting import format_cpu, format_lifetime, format_memory
from portwatch.utils.process import get_process_details, get_process_logs, kill_process

__all__ = [
    "format_cpu",
    "format_lifetime",
    "format_memory",
    "get_process_details",
    "get_process_logs",
    "kill_process",
]
