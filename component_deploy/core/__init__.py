"""Core deployment engine for component-deploy"""

from .component_list import (
    ComponentResolver,
    parse_component_list,
    load_component_list,
    filter_components,
    parse_requested,
    is_all,
)
from .artifact_locator import ArtifactLocator, ArtifactRef
from .version_store import VersionStore
from .deployment_engine import DeploymentEngine
from .plugin_sync import PluginSynchronizer
from .readiness import ReadinessWaiter, PortProbe, ListenerTableProbe, ConnectProbe
from .health import HealthVerifier
from .server_control import ServerController

__all__ = [
    "ComponentResolver",
    "parse_component_list",
    "load_component_list",
    "filter_components",
    "parse_requested",
    "is_all",
    "ArtifactLocator",
    "ArtifactRef",
    "VersionStore",
    "DeploymentEngine",
    "PluginSynchronizer",
    "ReadinessWaiter",
    "PortProbe",
    "ListenerTableProbe",
    "ConnectProbe",
    "HealthVerifier",
    "ServerController",
]
