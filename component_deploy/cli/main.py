# component_deploy/cli/main.py
"""Main CLI entry point for component-deploy"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, LOG_FORMAT
from ..models.config import DeployConfig
from ..services.config_service import ConfigService
from .utils.output import console

# Import all commands
from .commands import (
    deploy,
    health,
    status,
    rollback,
)


def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> RichHandler:
    """Setup logging configuration

    The root logger passes INFO and above so the per-run log file is
    complete; the console handler filters by the requested verbosity.

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
        quiet: Errors only

    Returns:
        The console handler
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=debug,
        show_path=debug,
        rich_tracebacks=True,
        tracebacks_suppress=[click]
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(min(level, logging.INFO))

    return handler


class Context:
    """CLI context object with lazy configuration loading"""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False
        self.console_handler: Optional[RichHandler] = None
        self._config_service: Optional[ConfigService] = None

    @property
    def config_service(self) -> ConfigService:
        if self._config_service is None:
            self._config_service = ConfigService(self.config_path)
        return self._config_service

    @property
    def config(self) -> DeployConfig:
        """Loaded configuration

        Raises:
            ConfigError: If the configuration cannot be loaded
        """
        return self.config_service.config

    def progress_level(self) -> None:
        """Show INFO on the console for long-running commands unless quiet or debug"""
        if self.console_handler is not None and not self.quiet and not self.debug:
            self.console_handler.setLevel(logging.INFO)


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('-c', '--config', 'config_path', type=click.Path(path_type=Path),
              help='Configuration file (default: $COMPONENT_DEPLOY_CONFIG or '
                   '/usr/local/etc/component-deploy.yaml)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, config_path):
    """Component Deploy - promote build artifacts to the application server

    Copies the newest build of each listed component from the build
    server, switches its live version link, restarts the server when
    something changed and runs the per-application health checks.
    """
    handler = setup_logging(verbose=verbose, debug=debug, quiet=quiet)

    ctx.obj = Context(config_path)
    ctx.obj.console_handler = handler
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.quiet = quiet


# Register commands
cli.add_command(deploy.deploy)
cli.add_command(health.health)
cli.add_command(status.status)
cli.add_command(rollback.rollback)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
