"""Status command implementation"""

import sys

import click

from ..utils.output import console, format_status
from ...api.exceptions import ConfigError
from ...services import DeployService


@click.command()
@click.argument('components', default='ALL')
@click.pass_context
def status(ctx, components):
    """Show live and previous versions of deployed components

    Examples:
        component-deploy status
        component-deploy status lobbyapi,AdminEdgeV2
    """
    try:
        statuses = DeployService(ctx.obj.config).status(components)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    if not statuses:
        console.print("[yellow]No valid components found[/yellow]")
        return

    console.print(format_status(statuses))
