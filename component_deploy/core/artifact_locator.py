"""Latest-artifact lookup on the upstream archive"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Optional

from ..api.exceptions import ArtifactSourceError
from ..models.component import Component
from ..storage.base import ArtifactSource
from ..utils.version_utils import canonical_version, version_part, version_sort_key


@dataclass(frozen=True)
class ArtifactRef:
    """A located remote artifact"""

    remote_path: str
    filename: str
    version: str


class ArtifactLocator:
    """Finds the highest version of an artifact in a remote directory

    "Not found" is a normal answer: an empty listing and a failed listing
    both yield None.
    """

    def __init__(self, source: ArtifactSource):
        self.source = source
        self.logger = logging.getLogger(self.__class__.__name__)

    def latest(self, directory: str, pattern: str, extension: str,
               name: Optional[str] = None) -> Optional[ArtifactRef]:
        """
        Locate the newest file matching pattern in directory

        Args:
            directory: Remote directory
            pattern: Filename glob
            extension: Artifact extension, stripped before comparing
            name: Component name prefix, stripped before comparing

        Returns:
            ArtifactRef for the highest version, or None
        """
        try:
            paths = self.source.list(directory, pattern)
        except ArtifactSourceError as e:
            self.logger.warning(f"Listing {directory}/{pattern} on {self.source.name} failed: {e}")
            return None

        if not paths:
            return None

        candidates = [
            (version_part(posixpath.basename(path), name, extension), path)
            for path in paths
        ]
        key = version_sort_key([part for part, _ in candidates])
        _, remote_path = max(candidates, key=lambda candidate: key(candidate[0]))

        filename = posixpath.basename(remote_path)
        return ArtifactRef(
            remote_path=remote_path,
            filename=filename,
            version=canonical_version(filename, extension),
        )

    def locate(self, component: Component, branch: str) -> Optional[ArtifactRef]:
        """Locate the newest artifact of a component for a branch"""
        directory = component.resolve_build_path(branch)
        self.logger.debug(f"Looking for {component.artifact_glob} in {directory}")
        return self.latest(directory, component.artifact_glob, component.extension,
                           name=component.name)
