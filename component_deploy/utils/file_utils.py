# component_deploy/utils/file_utils.py
"""File operation utilities"""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, content: str) -> None:
    """
    Write text through a temporary file and a single rename

    Args:
        path: Destination file
        content: Text to write
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(path.name + ".tmp")
    temp_path.write_text(content, encoding="utf-8")
    os.replace(temp_path, path)


def safe_remove(path: Path) -> bool:
    """
    Safely remove file, symlink or directory

    Args:
        path: Path to remove

    Returns:
        True if the path no longer exists
    """
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
        return True
    except OSError as e:
        logger.warning(f"Failed to remove {path}: {e}")
        return False


def is_empty_dir(path: Path) -> bool:
    """Check whether a directory is missing or has no entries"""
    if not path.is_dir():
        return True
    return not any(path.iterdir())


def chown_recursive(path: Path, user: Optional[str], group: Optional[str]) -> bool:
    """
    Recursively change ownership (chown -R user:group)

    Symlinks themselves are skipped, their targets are reached through
    the tree walk. Failures are logged, never raised.

    Returns:
        True if every entry was updated
    """
    if not user and not group:
        return True
    if not path.exists():
        return True

    ok = True
    entries = [path]
    if path.is_dir():
        for root, dirs, files in os.walk(path):
            entries.extend(Path(root) / name for name in dirs + files)

    for entry in entries:
        if entry.is_symlink():
            continue
        try:
            shutil.chown(entry, user=user or None, group=group or None)
        except (OSError, LookupError) as e:
            logger.warning(f"chown {user}:{group} failed for {entry}: {e}")
            ok = False

    return ok


def create_unique_directory(template: str, now: Optional[datetime] = None) -> Path:
    """
    Create a fresh directory named from a strftime template

    A numeric suffix is appended when the timestamped name already exists,
    so two calls within the same minute never share a directory.
    """
    now = now or datetime.now()
    base = Path(now.strftime(template))
    candidate = base
    counter = 1
    while True:
        try:
            candidate.mkdir(parents=True)
            return candidate
        except FileExistsError:
            candidate = base.with_name(f"{base.name}-{counter}")
            counter += 1


def move_contents(source: Path, destination: Path) -> List[Path]:
    """
    Move every entry of source into destination

    Returns:
        Paths of the moved entries at their new location
    """
    moved = []
    for entry in sorted(source.iterdir()):
        target = destination / entry.name
        shutil.move(str(entry), str(target))
        moved.append(target)
    return moved
