"""Filesystem artifact source implementation"""

import shutil
from pathlib import Path
from typing import List, Dict, Any

from .base import ArtifactSource
from ..api.exceptions import ArtifactSourceError


class FilesystemArtifactSource(ArtifactSource):
    """Archive reachable as a local path (NFS mount, CI workspace)"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Args:
            config: Configuration including:
                - base_path: Prefix for relative directories (optional)
        """
        super().__init__(config)
        base_path = self.config.get("base_path")
        self.base_path = Path(base_path) if base_path else None

    @property
    def name(self) -> str:
        return f"filesystem:{self.base_path or '/'}"

    def _get_full_path(self, path: str) -> Path:
        full_path = Path(path)
        if self.base_path and not full_path.is_absolute():
            full_path = self.base_path / full_path
        return full_path

    def list(self, directory: str, pattern: str) -> List[str]:
        full_path = self._get_full_path(directory)
        if not full_path.is_dir():
            return []
        return [str(p) for p in full_path.glob(pattern) if p.is_file()]

    def fetch(self, remote_path: str, local_path: Path) -> None:
        source_path = self._get_full_path(remote_path)
        if not source_path.is_file():
            raise ArtifactSourceError(f"Artifact not found: {source_path}")

        try:
            local_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_path, local_path)
        except OSError as e:
            raise ArtifactSourceError(f"Copy failed for {source_path}: {e}")
