"""JSON formatter for CLI output."""

from typing import Any

from rich.console import Console

from portwatch.models import PortDetectionResult


def format_json(console: Console, result: PortDetectionResult) -> None:
    """Format and display detection results as JSON."""
    console.print_json(result.model_dump_json(indent=2))


def to_dict(result: PortDetectionResult) -> dict[str, Any]:
    """Convert detection results to a dictionary."""
    return result.model_dump(mode="json")
