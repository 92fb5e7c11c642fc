"""Command line interface for component-deploy"""

from .main import cli, main

__all__ = ["cli", "main"]
