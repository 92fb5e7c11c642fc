"""Artifact source factory"""

from typing import Dict, Type

from .base import ArtifactSource
from .filesystem import FilesystemArtifactSource
from .ssh import SSHArtifactSource
from ..models.config import RemoteConfig


class SourceFactory:
    """Factory for creating artifact source instances"""

    # Registry of artifact sources
    _sources: Dict[str, Type[ArtifactSource]] = {
        "ssh": SSHArtifactSource,
        "filesystem": FilesystemArtifactSource,
    }

    @classmethod
    def create_from_config(cls, remote: RemoteConfig) -> ArtifactSource:
        """Create artifact source from remote configuration

        Args:
            remote: Remote configuration

        Returns:
            Artifact source instance

        Raises:
            ValueError: If the source type is not supported
        """
        if remote.type not in cls._sources:
            raise ValueError(f"Unsupported source type: {remote.type}")

        if remote.type == "ssh":
            config = {
                "host": remote.host,
                "user": remote.user,
                "key_file": remote.key_file,
                "strict_host_key_checking": remote.strict_host_key_checking,
                "timeout": remote.timeout,
            }
        else:
            config = {}

        return cls._sources[remote.type](config)
