"""Shared plugin directory refresh"""

import logging
import os
from datetime import datetime
from typing import Callable, List, Optional

from .artifact_locator import ArtifactLocator
from ..api.exceptions import ArtifactSourceError
from ..models.config import DeployConfig
from ..models.result import PluginSyncResult
from ..storage.base import ArtifactSource
from ..utils.file_utils import (
    chown_recursive,
    create_unique_directory,
    is_empty_dir,
    move_contents,
    safe_remove,
)
from ..utils.template_utils import render_template


class PluginSynchronizer:
    """Replaces the plugin set wholesale, keeping a full backup first"""

    def __init__(
        self,
        config: DeployConfig,
        source: ArtifactSource,
        locator: Optional[ArtifactLocator] = None,
        now: Callable[[], datetime] = datetime.now
    ):
        self.config = config
        self.source = source
        self.locator = locator or ArtifactLocator(source)
        self.now = now
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def should_run(all_requested: bool, patterns: List[str]) -> bool:
        return all_requested and bool(patterns)

    def pattern_directory(self, pattern: str, branch: str) -> str:
        archive_root = render_template(self.config.remote.archive_root, {"branch": branch})
        subdir = render_template(self.config.plugins.source_template, {"name": pattern})
        return f"{archive_root.rstrip('/')}/{subdir.strip('/')}"

    def sync(self, patterns: List[str], branch: str) -> PluginSyncResult:
        """
        Back up the plugin directory, then fetch the newest artifact per pattern

        Absence or a transfer error for one pattern is a warning and the
        remaining patterns are still processed. If the backup cannot be
        taken nothing is copied.
        """
        plugin_dir = self.config.paths.plugin_dir
        result = PluginSyncResult(ran=True)
        self.logger.info(">>> Starting plugin deployment...")

        try:
            plugin_dir.mkdir(parents=True, exist_ok=True)
            if is_empty_dir(plugin_dir):
                self.logger.info(">>> Plugin directory is empty, nothing to back up")
            else:
                result.backup_dir = create_unique_directory(
                    self.config.paths.backup_dir_template, self.now()
                )
                self.logger.info(f">>> Backing up plugins to {result.backup_dir}")
                moved = move_contents(plugin_dir, result.backup_dir)
                result.backed_up = [path.name for path in moved]
        except OSError as e:
            result.message = f"Plugin backup failed, plugins left untouched: {e}"
            self.logger.error(result.message)
            return result

        for pattern in patterns:
            self.logger.info(f"  - Processing plugin pattern: {pattern}")
            directory = self.pattern_directory(pattern, branch)
            artifact = self.locator.latest(
                directory,
                self.config.plugins.file_glob,
                os.path.splitext(self.config.plugins.file_glob)[1].lstrip("."),
            )
            if artifact is None:
                self.logger.warning(f"    WARNING: No artifact found for {pattern}")
                result.missing.append(pattern)
                continue

            target = plugin_dir / artifact.filename
            partial = target.with_name(target.name + ".part")
            try:
                self.source.fetch(artifact.remote_path, partial)
                os.replace(partial, target)
            except (ArtifactSourceError, OSError) as e:
                safe_remove(partial)
                self.logger.warning(f"    WARNING: Copy failed for {pattern}: {e}")
                result.missing.append(pattern)
                continue

            self.logger.info(f"    OK: Copied {artifact.filename} for {pattern}")
            result.copied.append(artifact.filename)

        ownership = self.config.ownership
        if ownership.enabled:
            chown_recursive(plugin_dir, ownership.user, ownership.group)

        result.message = f"{len(result.copied)} copied, {len(result.missing)} missing"
        return result
