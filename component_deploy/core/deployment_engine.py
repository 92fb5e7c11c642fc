"""Per-component promotion of build artifacts

Each component walks the same state machine:

    locate artifact -> (not found: SKIPPED)
    check current   -> (already current: SKIPPED)
    stage -> promote -> normalize ownership -> invalidate cache -> DEPLOYED

A missing destination directory is FAILED, a transport error while
listing or copying is SKIPPED, and nothing raised inside one component
stops the next one.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from .artifact_locator import ArtifactLocator, ArtifactRef
from .version_store import VersionStore
from ..api.exceptions import (
    ArtifactSourceError,
    PreconditionError,
    VersionStoreError,
)
from ..constants import MSG_ALREADY_CURRENT, MSG_DEPLOY_SUCCESS
from ..models.component import Component
from ..models.config import DeployConfig
from ..models.result import DeploymentOutcome
from ..storage.base import ArtifactSource
from ..utils.file_utils import chown_recursive, safe_remove
from ..utils.template_utils import render_template


class DeploymentEngine:
    """Promotes new artifact versions for a list of components"""

    def __init__(
        self,
        config: DeployConfig,
        source: ArtifactSource,
        locator: Optional[ArtifactLocator] = None,
        version_store: Optional[VersionStore] = None
    ):
        """Initialize deployment engine

        Args:
            config: Deployment configuration
            source: Upstream artifact source
            locator: Artifact locator (built from source if omitted)
            version_store: Version store (built from the war base if omitted)
        """
        self.config = config
        self.source = source
        self.locator = locator or ArtifactLocator(source)
        self.version_store = version_store or VersionStore(
            config.paths.war_base, config.remote.extension
        )
        self.logger = logging.getLogger(self.__class__.__name__)

    def deploy_all(self, components: List[Component], branch: str) -> List[DeploymentOutcome]:
        """Deploy components one at a time, in list order"""
        return [self.deploy_component(component, branch) for component in components]

    def deploy_component(self, component: Component, branch: str) -> DeploymentOutcome:
        """Deploy one component and classify the result"""
        self.logger.info(f"********** Deploying Component: {component.name} **********")
        self.logger.info(f"Component = {component.name}, Branch = {branch}")

        try:
            return self._deploy(component, branch)

        except PreconditionError as e:
            self.logger.error(f"ERROR: {e}")
            return DeploymentOutcome.failed(component.name, str(e), e.error_code)

        except ArtifactSourceError as e:
            self.logger.warning(f"WARNING: transfer failed for {component.name}, skipping: {e}")
            return DeploymentOutcome.skipped(component.name, str(e), error_code=e.error_code)

        except VersionStoreError as e:
            self.logger.error(f"ERROR: {e}")
            return DeploymentOutcome.failed(component.name, str(e), e.error_code)

        except Exception as e:
            self.logger.error(f"ERROR: unexpected failure deploying {component.name}: {e}")
            self.logger.debug("Traceback:", exc_info=True)
            return DeploymentOutcome.failed(component.name, f"Unexpected error: {e}")

    def _deploy(self, component: Component, branch: str) -> DeploymentOutcome:
        destination = component.destination_name
        self._ensure_destination(component)

        artifact = self.locator.locate(component, branch)
        if artifact is None:
            self.logger.warning(f"WARNING: No {component.extension.upper()} found remotely "
                                f"for {component.name}, skipping")
            return DeploymentOutcome.skipped(component.name, "No artifact found remotely")

        current = self.version_store.current_version(destination)
        self.logger.info(f"New Version = {artifact.version}")
        self.logger.info(f"Current Version = {current or 'NONE'}")

        if self.version_store.is_current(destination, artifact.version):
            message = MSG_ALREADY_CURRENT.format(component=component.name, version=artifact.version)
            self.logger.info(message)
            return DeploymentOutcome.skipped(component.name, message, version=artifact.version)

        staged_path = self._stage(component, artifact)
        self.version_store.promote(destination, artifact.version, staged_path, artifact.filename)

        self._normalize_ownership(component)
        self.invalidate_cache(component)

        self.logger.info(MSG_DEPLOY_SUCCESS.format(component=component.name, version=artifact.version))
        return DeploymentOutcome.deployed(
            component.name, artifact.version, artifact.filename, previous_version=current
        )

    def _ensure_destination(self, component: Component) -> None:
        destination_dir = component.artifact_base_dir
        if destination_dir.is_dir():
            return
        if component.creates_destination:
            self.logger.info(f"Creating destination {destination_dir} for {component.name}")
            destination_dir.mkdir(parents=True, exist_ok=True)
            return
        raise PreconditionError(destination_dir)

    def _stage(self, component: Component, artifact: ArtifactRef) -> Path:
        """Copy the artifact into <base>/<dest>/<version>/<dest>.<ext>"""
        version_dir = self.version_store.version_dir(component.destination_name, artifact.version)
        created = not version_dir.exists()
        version_dir.mkdir(parents=True, exist_ok=True)

        staged_path = version_dir / f"{component.destination_name}.{component.extension}"
        partial_path = staged_path.with_name(staged_path.name + ".part")

        self.logger.info(f"Copying {artifact.remote_path} from {self.source.name}")
        try:
            self.source.fetch(artifact.remote_path, partial_path)
            os.replace(partial_path, staged_path)
        except (ArtifactSourceError, OSError):
            if created:
                safe_remove(version_dir)
            else:
                safe_remove(partial_path)
            raise

        return staged_path

    def _normalize_ownership(self, component: Component) -> None:
        ownership = self.config.ownership
        if not ownership.enabled:
            return
        for path in (component.artifact_base_dir, self.config.paths.plugin_dir):
            if not chown_recursive(path, ownership.user, ownership.group):
                self.logger.warning(f"Ownership of {path} not fully normalized")

    def invalidate_cache(self, component: Component) -> None:
        """Drop the server's unpacked/compiled copy of the component

        Best effort: a path that cannot be removed is logged and left behind.
        """
        self.logger.info(f"Cleaning server cache for {component.destination_name}")
        variables = {
            "war_base": self.config.paths.war_base,
            "name": component.destination_name,
        }
        for template in self.config.paths.cache_paths:
            cache_path = Path(render_template(template, variables))
            try:
                if cache_path.exists() or cache_path.is_symlink():
                    safe_remove(cache_path)
            except OSError as e:
                self.logger.warning(f"WARNING: cannot clean cache {cache_path}: {e}")
