"""Deploy command implementation"""

import sys
from pathlib import Path

import click

from ..utils.logfile import attach_file_log, detach_file_log
from ..utils.output import console, format_run_result
from ...api.exceptions import ConfigError
from ...services import DeployService, ReportService


@click.command()
@click.argument('branch')
@click.argument('components')
@click.option('--restart/--no-restart', default=True,
              help='Restart the application server when something was deployed')
@click.option('--health/--no-health', default=True,
              help='Wait for the service port and run health checks')
@click.option('--report/--no-report', default=True, help='Write the HTML report')
@click.option('--mail/--no-mail', default=True, help='Mail the HTML report')
@click.pass_context
def deploy(ctx, branch, components, restart, health, report, mail):
    """Deploy the newest builds of COMPONENTS from BRANCH

    BRANCH is "trunk" or a branch suffix (e.g. "25.1" for pala-25.1).
    COMPONENTS is "ALL" or a comma-separated subset of the component
    list; plugins are refreshed only for ALL.

    The exit status is 1 when any component failed to deploy. Health
    check results do not change it.

    Examples:

        # Everything from trunk
        component-deploy deploy trunk ALL

        # Two components from a branch, without restarting the server
        component-deploy deploy 25.1 lobbyapi,AdminEdgeV2 --no-restart
    """
    ctx.obj.progress_level()

    try:
        config = ctx.obj.config
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    handler = attach_file_log(config.paths.log_dir)
    try:
        try:
            result = DeployService(config).run(branch, components, restart=restart, health=health)
        except ConfigError as e:
            console.print(f"[red]Configuration error:[/red] {e}")
            sys.exit(1)

        if handler is not None:
            result.log_file = Path(handler.baseFilename)

        if result.components:
            reporter = ReportService(config)
            if report:
                reporter.publish(result, mail=mail)
            else:
                reporter.log_summary(result)

        format_run_result(result)
    finally:
        detach_file_log(handler)

    sys.exit(result.exit_code)
