"""Deploy service: one orchestrated deployment run"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.component_list import (
    ComponentResolver,
    filter_components,
    is_all,
    load_component_list,
)
from ..core.deployment_engine import DeploymentEngine
from ..core.health import HealthVerifier
from ..core.plugin_sync import PluginSynchronizer
from ..core.readiness import ReadinessWaiter
from ..core.server_control import ServerController
from ..core.version_store import VersionStore
from ..constants import MSG_ROLLED_BACK
from ..models.component import Component
from ..models.config import DeployConfig
from ..models.result import RunResult
from ..storage.base import ArtifactSource
from ..storage.factory import SourceFactory


@dataclass(frozen=True)
class ComponentStatus:
    """Deployed state of one component as found on disk"""

    component: str
    destination: str
    current_version: Optional[str]
    previous_version: Optional[str]
    marker: Optional[str]
    present: bool


class DeployService:
    """Runs the deploy / restart / wait / verify sequence

    Collaborators are built from the configuration unless passed in.
    """

    def __init__(
        self,
        config: DeployConfig,
        source: Optional[ArtifactSource] = None,
        engine: Optional[DeploymentEngine] = None,
        plugin_sync: Optional[PluginSynchronizer] = None,
        server: Optional[ServerController] = None,
        waiter: Optional[ReadinessWaiter] = None,
        verifier: Optional[HealthVerifier] = None
    ):
        self.config = config
        self.source = source or SourceFactory.create_from_config(config.remote)
        self.resolver = ComponentResolver(config)
        self.version_store = VersionStore(config.paths.war_base, config.remote.extension)
        self.engine = engine or DeploymentEngine(config, self.source, version_store=self.version_store)
        self.plugin_sync = plugin_sync or PluginSynchronizer(config, self.source)
        self.server = server or ServerController(config.restart)
        self.waiter = waiter or ReadinessWaiter(config.readiness)
        self.verifier = verifier or HealthVerifier(config.health)
        self.logger = logging.getLogger(self.__class__.__name__)

    def select(self, component_input: str) -> Tuple[List[str], List[str], List[str]]:
        """
        Load the component list and apply the requested subset

        Returns:
            (selected names, unknown names, plugin patterns)

        Raises:
            ConfigError: If the list file is missing
        """
        component_list = load_component_list(self.config.paths.list_file)
        selected, unknown = filter_components(component_list, component_input)
        return selected, unknown, component_list.plugin_patterns

    def run(self, branch_input: str, component_input: str,
            restart: bool = True, health: bool = True) -> RunResult:
        """
        Execute a full deployment run

        Args:
            branch_input: "trunk" or a branch suffix
            component_input: "ALL" or a comma-separated subset
            restart: Allow the server restart phase
            health: Run the readiness wait and health checks

        Returns:
            RunResult with outcomes in invocation order

        Raises:
            ConfigError: If the component list cannot be loaded
        """
        branch = self.config.branch.resolve(branch_input)
        result = RunResult(branch=branch, requested=component_input)
        self.logger.info(f"Branch = {branch}")

        selected, unknown, patterns = self.select(component_input)
        result.components = selected
        result.unknown_components = unknown

        if not selected:
            self.logger.info("No valid components found, skipping deployment and health check.")
            result.complete()
            return result

        self.logger.info(f"Components to deploy: {' '.join(selected)}")

        if PluginSynchronizer.should_run(is_all(component_input), patterns):
            result.plugin_sync = self.plugin_sync.sync(patterns, branch)
        else:
            self.logger.info(">>> Plugin deployment not requested")

        components = self.resolver.resolve_all(selected)
        result.deployments = self.engine.deploy_all(components, branch)

        if result.restart_needed and restart and self.config.restart.enabled:
            result.restart = self.server.restart()
        else:
            self.logger.info(">>> Server restart not required")

        if health:
            self._verify(components, result)

        result.complete()
        return result

    def check_health(self, component_input: str, wait: bool = True) -> RunResult:
        """Readiness wait (optional) and health verification without deploying"""
        result = RunResult(branch="", requested=component_input)
        selected, unknown, _ = self.select(component_input)
        result.components = selected
        result.unknown_components = unknown

        if selected:
            components = self.resolver.resolve_all(selected)
            if wait:
                self._verify(components, result)
            else:
                result.health = self.verifier.verify(components)
        else:
            self.logger.info("No valid components found, skipping health check.")

        result.complete()
        return result

    def _verify(self, components: List[Component], result: RunResult) -> None:
        result.readiness = self.waiter.wait()
        result.health = self.verifier.verify(components)

    def status(self, component_input: str) -> List[ComponentStatus]:
        """Live, previous and marker state for the selected components"""
        selected, _, _ = self.select(component_input)
        statuses = []
        for component in self.resolver.resolve_all(selected):
            destination = component.destination_name
            statuses.append(ComponentStatus(
                component=component.name,
                destination=destination,
                current_version=self.version_store.current_version(destination),
                previous_version=self.version_store.previous_version(destination),
                marker=self.version_store.marker(destination),
                present=component.artifact_base_dir.is_dir(),
            ))
        return statuses

    def rollback(self, name: str) -> Tuple[Optional[str], str]:
        """
        Make the previous version of a component live again

        Raises:
            NoPreviousVersionError: If nothing was deployed before the
                current version
            VersionStoreError: If a pointer cannot be swapped
        """
        component = self.resolver.resolve(name)
        old_version, new_version = self.version_store.rollback(component.destination_name)
        self.engine.invalidate_cache(component)
        self.logger.info(MSG_ROLLED_BACK.format(
            component=name, old_version=old_version or "NONE", new_version=new_version
        ))
        return old_version, new_version
