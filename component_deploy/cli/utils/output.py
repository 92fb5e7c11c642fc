# component_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING
from ...models.result import (
    DeploymentStatus,
    HealthOutcome,
    HealthStatus,
    RunResult,
)
from ...services.deploy_service import ComponentStatus

console = Console()

_DEPLOY_STYLES = {
    DeploymentStatus.DEPLOYED: f"[green]{EMOJI_SUCCESS} deployed[/green]",
    DeploymentStatus.SKIPPED: f"[yellow]{EMOJI_WARNING} skipped[/yellow]",
    DeploymentStatus.FAILED: f"[red]{EMOJI_ERROR} failed[/red]",
}

_HEALTH_STYLES = {
    HealthStatus.PASSED: "[green]OK[/green]",
    HealthStatus.SKIPPED: "[yellow]SKIPPED[/yellow]",
    HealthStatus.FAILED: "[red]FAILED[/red]",
}


def format_deployments(result: RunResult) -> Table:
    """Per-component deployment outcomes, in invocation order"""
    table = Table(title="Deployment", box=box.ROUNDED)
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Version", style="green")
    table.add_column("Previous", style="dim")
    table.add_column("Details")

    for outcome in result.deployments:
        table.add_row(
            outcome.component,
            _DEPLOY_STYLES[outcome.status],
            outcome.version or "-",
            outcome.previous_version or "-",
            outcome.message if not outcome.is_deployed else "",
        )
    return table


def format_health(outcomes: List[HealthOutcome]) -> Table:
    table = Table(title="Health", box=box.ROUNDED)
    table.add_column("Application", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Checked path", style="dim")

    for outcome in outcomes:
        table.add_row(
            outcome.component,
            _HEALTH_STYLES[outcome.status],
            str(outcome.path) if outcome.path else "-",
        )
    return table


def format_status(statuses: List[ComponentStatus]) -> Table:
    """Live and previous versions per component"""
    table = Table(title="Deployed Versions", box=box.ROUNDED)
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Directory")
    table.add_column("Live", style="green")
    table.add_column("Previous", style="dim")
    table.add_column("Marker")

    for status in statuses:
        directory = status.destination if status.present else f"[red]{status.destination} (missing)[/red]"
        table.add_row(
            status.component,
            directory,
            status.current_version or "-",
            status.previous_version or "-",
            status.marker or "N/A",
        )
    return table


def format_run_result(result: RunResult) -> None:
    """Format and display a finished deployment run"""
    if result.unknown_components:
        console.print(
            f"[yellow]{EMOJI_WARNING} Not in component list:[/yellow] "
            f"{', '.join(result.unknown_components)}"
        )

    if not result.components:
        console.print("[yellow]No valid components found, nothing deployed[/yellow]")
        return

    if result.deployments:
        console.print(format_deployments(result))

    if result.plugin_sync.ran:
        console.print(f"[bold]Plugins:[/bold] {result.plugin_sync.message}")
        if result.plugin_sync.backup_dir:
            console.print(f"[dim]Backup: {result.plugin_sync.backup_dir}[/dim]")

    if result.readiness is not None and not result.readiness.ready:
        console.print(f"[yellow]{EMOJI_WARNING} Service port did not open in time[/yellow]")

    if result.health:
        console.print(format_health(result.health))

    lines = [
        f"[bold]Branch:[/bold] {result.branch}",
        f"[bold]Deployed:[/bold] {len(result.deployed)}  "
        f"[bold]Skipped:[/bold] {len(result.skipped)}  "
        f"[bold]Failed:[/bold] {len(result.failed)}",
    ]
    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.1f}s")
    if result.log_file:
        lines.append(f"[bold]Log:[/bold] {result.log_file}")

    if result.has_failures:
        panel = Panel("\n".join(lines), title="Deployment completed with errors", border_style="red")
    else:
        panel = Panel("\n".join(lines), title="Deployment completed successfully", border_style="green")
    console.print(panel)
