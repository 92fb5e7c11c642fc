"""Rollback command implementation"""

import sys

import click

from ..utils.output import console
from ...api.exceptions import ConfigError, VersionStoreError
from ...constants import MSG_ROLLED_BACK
from ...services import DeployService


@click.command()
@click.argument('component')
@click.pass_context
def rollback(ctx, component):
    """Switch COMPONENT back to its previous version

    Live and previous links trade places, so running rollback twice
    returns to the original version. The server is not restarted.
    """
    try:
        old_version, new_version = DeployService(ctx.obj.config).rollback(component)
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)
    except VersionStoreError as e:
        console.print(f"[red]Rollback failed:[/red] {e}")
        sys.exit(1)

    console.print(MSG_ROLLED_BACK.format(
        component=component, old_version=old_version or "NONE", new_version=new_version
    ))
