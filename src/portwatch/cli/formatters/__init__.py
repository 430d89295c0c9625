"""CLI output formatters."""

from portwatch.cli.formatters.table import format_detection_result, format_process_details
from portwatch.cli.formatters.json_fmt import format_json

__all__ = ["format_detection_result", "format_process_details", "format_json"]
