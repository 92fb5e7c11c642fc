"""CLI utility functions"""

from .logfile import attach_file_log, detach_file_log
from .output import (
    console,
    format_deployments,
    format_health,
    format_status,
    format_run_result,
)

__all__ = [
    # Log file
    'attach_file_log',
    'detach_file_log',

    # Output
    'console',
    'format_deployments',
    'format_health',
    'format_status',
    'format_run_result',
]
