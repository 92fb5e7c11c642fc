"""CLI commands"""

from . import deploy
from . import health
from . import status
from . import rollback

__all__ = [
    "deploy",
    "health",
    "status",
    "rollback",
]
