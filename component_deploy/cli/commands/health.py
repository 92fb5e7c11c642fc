"""Health command implementation"""

import sys

import click

from ..utils.output import console, format_health
from ...api.exceptions import ConfigError
from ...services import DeployService


@click.command()
@click.argument('components', default='ALL')
@click.option('--wait/--no-wait', default=True, help='Wait for the service port first')
@click.pass_context
def health(ctx, components, wait):
    """Run health checks without deploying

    Always exits 0 once the checks ran; read the table (or the summary
    file) for the results.
    """
    ctx.obj.progress_level()

    try:
        result = DeployService(ctx.obj.config).check_health(components, wait=wait)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    if not result.health:
        console.print("[yellow]No valid components found[/yellow]")
        return

    console.print(format_health(result.health))
