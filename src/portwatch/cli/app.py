"""Main CLI application using Typer."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from portwatch.version import __version__
from portwatch.core.config import get_settings
from portwatch.core.exceptions import PortwatchError
from portwatch.core.logging import setup_logging

app = typer.Typer(
    name="portwatch",
    help="Portwatch - find and stop the processes holding your ports",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"Portwatch version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Portwatch - who is listening on which port."""
    setup_logging()


def _detect():
    """Run one detection pass with the configured presets."""
    from portwatch.ports.pipeline import create_organizer, create_registry, detect_and_organize

    settings = get_settings()
    registry = create_registry(settings)
    organizer = create_organizer(settings)
    result = asyncio.run(detect_and_organize(registry, organizer))
    return registry, result


@app.command()
def dashboard() -> None:
    """
    Open the interactive dashboard.

    Keys: arrows/j/k move, / filter, x kill, c copy, v command,
    l logs, space collapse, d details, 1/2/3 sort, ? help, q quit.
    """
    from portwatch.tui.dashboard import Dashboard

    settings = get_settings()
    setup_logging(log_file=settings.get_dashboard_log_file())

    try:
        Dashboard(settings).run()
    except PortwatchError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1) from None
    except KeyboardInterrupt:
        pass


@app.command("list")
def list_ports(
    format_type: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json"),
    ] = "table",
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="Only show one category (e.g. database)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write JSON results to a file"),
    ] = None,
) -> None:
    """
    List listening ports grouped by category.

    Examples:
        portwatch list
        portwatch list --category dev-server
        portwatch list --format json
    """
    from portwatch.cli.formatters import format_detection_result, format_json
    from portwatch.cli.formatters.json_fmt import to_dict

    try:
        _, result = _detect()
    except Exception as e:
        console.print(f"[red]Port detection failed: {e}[/red]")
        raise typer.Exit(1) from None

    if category:
        groups = [g for g in result.groups if g.type == category]
        result = result.model_copy(
            update={
                "groups": groups,
                "ports": [p for g in groups for p in g.ports],
            }
        )

    if output:
        with open(output, "w") as f:
            json.dump(to_dict(result), f, indent=2, default=str)
        console.print(f"[green]Results saved to {output}[/green]")
    elif format_type == "json":
        format_json(console, result)
    else:
        format_detection_result(console, result)


@app.command()
def kill(
    port: Annotated[int, typer.Argument(help="Port number whose process to kill", min=1, max=65535)],
    force: Annotated[
        bool,
        typer.Option("--force", help="Kill immediately (SIGKILL / taskkill /F)"),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation"),
    ] = False,
) -> None:
    """Kill the process(es) listening on a port."""
    from portwatch.actions.port_actions import kill_port

    try:
        registry, result = _detect()
    except Exception as e:
        console.print(f"[red]Port detection failed: {e}[/red]")
        raise typer.Exit(1) from None

    targets = result.find_port(port)
    if not targets:
        console.print(f"[yellow]Nothing is listening on port {port}[/yellow]")
        raise typer.Exit(1)

    failed = False
    for target in targets:
        label = f"{target.process_name or 'process'} (PID {target.pid})"
        if not yes and not typer.confirm(f"Kill {label} on port {port}?"):
            console.print("[yellow]Skipped[/yellow]")
            continue

        killed = asyncio.run(kill_port(registry.adapter, target, force=force))
        if killed:
            console.print(f"[green]Killed {label}[/green]")
        else:
            console.print(f"[red]Failed to kill {label}[/red]")
            failed = True

    if failed:
        raise typer.Exit(1)


@app.command()
def info(
    port: Annotated[int, typer.Argument(help="Port number to inspect", min=1, max=65535)],
) -> None:
    """Show details of the process(es) listening on a port."""
    from portwatch.cli.formatters import format_process_details
    from portwatch.utils.process import get_process_details

    try:
        registry, result = _detect()
    except Exception as e:
        console.print(f"[red]Port detection failed: {e}[/red]")
        raise typer.Exit(1) from None

    targets = result.find_port(port)
    if not targets:
        console.print(f"[yellow]Nothing is listening on port {port}[/yellow]")
        raise typer.Exit(1)

    adapter = registry.adapter

    async def gather_details(pid: int):
        details = await get_process_details(adapter, pid)
        try:
            lifetime = await adapter.get_process_lifetime(pid)
        except PortwatchError:
            lifetime = None
        return details, lifetime

    for target in targets:
        details, lifetime = asyncio.run(gather_details(target.pid))
        format_process_details(console, target, details, lifetime)


@app.command()
def config(
    show: Annotated[
        bool,
        typer.Option("--show", "-s", help="Show current configuration"),
    ] = False,
    validate: Annotated[
        bool,
        typer.Option("--validate", help="Validate configuration"),
    ] = False,
) -> None:
    """Manage configuration settings."""
    settings = get_settings()

    if show or not validate:
        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Freshness Window", f"{settings.freshness_window_seconds}s")
        table.add_row("Process Cache TTL", f"{settings.process_cache_ttl_seconds}s")
        table.add_row("Process Cache Size", str(settings.process_cache_max_size))
        table.add_row("Refresh Interval", f"{settings.refresh_interval_seconds}s")
        table.add_row("Kill Grace Period", f"{settings.kill_grace_period_ms}ms")
        table.add_row("Confirm Kill", str(settings.confirm_kill))
        table.add_row("Type Presets File", str(settings.type_presets_file or "built-in"))
        table.add_row("Key Binding Overrides", str(len(settings.key_bindings)))
        table.add_row("Log Level", settings.log_level)
        table.add_row("Log Format", settings.log_format)
        table.add_row("Dashboard Log File", str(settings.get_dashboard_log_file()))

        console.print(table)

    if validate:
        from portwatch.ports.presets import resolve_type_presets
        from portwatch.tui.keyboard import KeyMap

        errors = []

        try:
            resolve_type_presets(settings.type_presets_file)
        except PortwatchError as e:
            errors.append(e.message)

        try:
            KeyMap.from_overrides(settings.key_bindings)
        except PortwatchError as e:
            errors.append(e.message)

        if errors:
            console.print("[red]Configuration errors:[/red]")
            for error in errors:
                console.print(f"  - {error}")
            raise typer.Exit(1)
        else:
            console.print("[green]Configuration is valid[/green]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
