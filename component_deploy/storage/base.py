# component_deploy/storage/base.py
"""Artifact source abstract base class"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Dict, Any


class ArtifactSource(ABC):
    """Abstract base class for upstream artifact archives

    Implementations raise ArtifactSourceError when the archive cannot be
    reached or a transfer fails. An empty listing is not an error.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize artifact source

        Args:
            config: Source-specific configuration
        """
        self.config = config or {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable source name for logs"""
        pass

    @abstractmethod
    def list(self, directory: str, pattern: str) -> List[str]:
        """
        List files matching a glob pattern in a remote directory

        Args:
            directory: Remote directory
            pattern: Filename glob (e.g. "lobbyapi-*.war")

        Returns:
            Full remote paths, unordered
        """
        pass

    @abstractmethod
    def fetch(self, remote_path: str, local_path: Path) -> None:
        """
        Copy one remote file to a local path

        Args:
            remote_path: Full remote path
            local_path: Local destination file
        """
        pass
