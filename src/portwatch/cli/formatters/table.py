"""Table formatter for CLI output."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from portwatch.models import PortCategory, PortDetectionResult, PortInfo, ProcessDetails
from portwatch.utils.formatting import format_cpu, format_lifetime, format_memory


def _truncate(text: str, limit: int = 60) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def format_detection_result(console: Console, result: PortDetectionResult) -> None:
    """Format and display grouped ports as tables."""
    if not result.groups:
        console.print("[yellow]No listening ports found[/yellow]")
        return

    for group in result.groups:
        style = "red" if group.type == PortCategory.UNEXPECTED.value else "green"
        table = Table(
            title=f"[{style}]{group.name}[/{style}] ({len(group.ports)})",
            title_justify="left",
            show_header=True,
        )
        table.add_column("Port", style="cyan", justify="right")
        table.add_column("Proto")
        table.add_column("PID", justify="right")
        table.add_column("Process", style="green")
        table.add_column("User")
        table.add_column("Uptime", justify="right")
        table.add_column("Command")

        for port in group.ports:
            table.add_row(
                str(port.port),
                port.protocol.value,
                str(port.pid),
                port.process_name,
                port.user,
                format_lifetime(port.lifetime),
                _truncate(port.command),
            )

        console.print(table)

    console.print(f"[bold]{result.total_ports}[/bold] listening ports")


def format_process_details(
    console: Console,
    port: PortInfo,
    details: ProcessDetails | None,
    lifetime: int | None,
) -> None:
    """Display details for the process behind a port."""
    command = details.command if details else port.command
    cwd = details.cwd if details else port.cwd

    console.print(
        Panel(
            f"Port: [cyan]{port.port}/{port.protocol.value}[/cyan]\n"
            f"Category: [green]{port.type or 'other'}[/green]\n"
            f"PID: {port.pid}\n"
            f"Process: {port.process_name or 'unknown'}\n"
            f"User: {port.user or 'unknown'}\n"
            f"Memory: {format_memory(port.memory)}\n"
            f"CPU: {format_cpu(port.cpu)}\n"
            f"Uptime: {format_lifetime(lifetime)}\n"
            f"Working directory: {cwd or 'unknown'}\n"
            f"Command: {command or 'unknown'}",
            title=f"Port {port.port}",
        )
    )
