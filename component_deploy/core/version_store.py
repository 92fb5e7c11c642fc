"""Live pointer and current-version marker management

Layout per deployed name under the war base::

    <base>/<name>/<version>/            staged artifact
    <base>/<name>/<name>                -> <version>   (live pointer)
    <base>/<name>/<name>-previous       -> <version>   (rollback reference)
    <base>/<name>.current_version       artifact filename

Pointers are relative symlinks replaced with a single rename, so a reader
always sees either the old or the new target.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from ..api.exceptions import VersionStoreError, NoPreviousVersionError
from ..constants import (
    DEFAULT_ARTIFACT_EXTENSION,
    PREVIOUS_LINK_SUFFIX,
    MARKER_SUFFIX,
    TEMP_SUFFIX,
    MSG_LINK_UPDATED,
)
from ..utils.file_utils import atomic_write_text


class VersionStore:
    """Reads and repoints the deployed version of each component"""

    def __init__(self, war_base: Path, extension: str = DEFAULT_ARTIFACT_EXTENSION):
        self.war_base = Path(war_base)
        self.extension = extension
        self.logger = logging.getLogger(self.__class__.__name__)

    def component_dir(self, name: str) -> Path:
        return self.war_base / name

    def version_dir(self, name: str, version: str) -> Path:
        return self.component_dir(name) / version

    def live_link(self, name: str) -> Path:
        return self.component_dir(name) / name

    def previous_link(self, name: str) -> Path:
        return self.component_dir(name) / f"{name}{PREVIOUS_LINK_SUFFIX}"

    def marker_file(self, name: str) -> Path:
        return self.war_base / f"{name}{MARKER_SUFFIX}"

    @staticmethod
    def _read_link(link: Path) -> Optional[str]:
        if not link.is_symlink():
            return None
        return os.readlink(link) or None

    def current_version(self, name: str) -> Optional[str]:
        """Version the live pointer targets, None before the first deploy"""
        return self._read_link(self.live_link(name))

    def previous_version(self, name: str) -> Optional[str]:
        return self._read_link(self.previous_link(name))

    def marker(self, name: str) -> Optional[str]:
        """Artifact filename recorded by the last promotion"""
        try:
            content = self.marker_file(name).read_text(encoding="utf-8").strip()
        except OSError:
            return None
        return content or None

    def is_current(self, name: str, candidate_version: str) -> bool:
        return self.current_version(name) == candidate_version

    def _swap_link(self, link: Path, target: str) -> None:
        """Point link at target with one directory-entry replace"""
        temp_link = link.with_name(link.name + TEMP_SUFFIX)
        try:
            if temp_link.is_symlink() or temp_link.exists():
                temp_link.unlink()
            temp_link.symlink_to(target, target_is_directory=True)
            os.replace(temp_link, link)
        except OSError as e:
            if temp_link.is_symlink():
                temp_link.unlink()
            raise VersionStoreError(f"Cannot update link {link} -> {target}: {e}")

        self.logger.debug(MSG_LINK_UPDATED.format(link=link, target=target))

    def promote(self, name: str, new_version: str, staged_path: Path,
                artifact_filename: str) -> bool:
        """
        Make new_version the live version

        The previous live target (if any) becomes the previous pointer,
        then the live pointer is swapped, then the marker is rewritten.

        Args:
            name: Deployed (destination) name
            new_version: Version directory name to activate
            staged_path: Staged artifact inside the version directory
            artifact_filename: Filename recorded in the marker

        Returns:
            False when new_version was already live (nothing touched)

        Raises:
            VersionStoreError: If the staged artifact is missing or a
                pointer cannot be written
        """
        if self.is_current(name, new_version):
            return False

        if not self.version_dir(name, new_version).is_dir() or not staged_path.exists():
            raise VersionStoreError(f"Staged artifact missing: {staged_path}")

        current = self.current_version(name)
        if current:
            self._swap_link(self.previous_link(name), current)
        self._swap_link(self.live_link(name), new_version)

        try:
            atomic_write_text(self.marker_file(name), f"{artifact_filename}\n")
        except OSError as e:
            raise VersionStoreError(f"Cannot write marker {self.marker_file(name)}: {e}")

        return True

    def rollback(self, name: str) -> Tuple[Optional[str], str]:
        """
        Swap the live and previous pointers

        Returns:
            (version that was live, version now live)

        Raises:
            NoPreviousVersionError: If no previous pointer exists
        """
        previous = self.previous_version(name)
        if not previous:
            raise NoPreviousVersionError(name)
        if not self.version_dir(name, previous).is_dir():
            raise VersionStoreError(f"Previous version directory missing: {self.version_dir(name, previous)}")

        current = self.current_version(name)
        self._swap_link(self.live_link(name), previous)
        if current:
            self._swap_link(self.previous_link(name), current)

        # The original filename of an older build is not kept on disk
        try:
            atomic_write_text(self.marker_file(name), f"{previous}.{self.extension}\n")
        except OSError as e:
            raise VersionStoreError(f"Cannot write marker {self.marker_file(name)}: {e}")

        return current, previous
