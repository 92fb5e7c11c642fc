"""Artifact sources for component-deploy"""

from .base import ArtifactSource
from .filesystem import FilesystemArtifactSource
from .ssh import SSHArtifactSource
from .factory import SourceFactory

__all__ = [
    "ArtifactSource",
    "FilesystemArtifactSource",
    "SSHArtifactSource",
    "SourceFactory",
]
