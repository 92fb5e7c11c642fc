"""Per-run log file"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from ...constants import FILE_LOG_FORMAT, LOG_FILE_TEMPLATE

logger = logging.getLogger(__name__)


def attach_file_log(log_dir: Optional[Path], now: Optional[datetime] = None) -> Optional[logging.FileHandler]:
    """
    Add a timestamped file handler to the root logger

    Returns:
        The handler (its baseFilename is the log path), or None when no
        log directory is configured or it cannot be created
    """
    if log_dir is None:
        return None

    now = now or datetime.now()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / now.strftime(LOG_FILE_TEMPLATE), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Cannot open log file in {log_dir}: {e}")
        return None

    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def detach_file_log(handler: Optional[logging.FileHandler]) -> None:
    if handler is None:
        return
    logging.getLogger().removeHandler(handler)
    handler.close()
