"""Component Deploy - promote build artifacts to a local application server.

Copies the newest build of each listed component from the build server,
switches versioned links atomically, refreshes the shared plugin set,
restarts the server when needed and verifies application health.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .core import (
    ArtifactLocator,
    VersionStore,
    DeploymentEngine,
    PluginSynchronizer,
    ReadinessWaiter,
    HealthVerifier,
    ServerController,
)
from .services import ConfigService, DeployService, ReportService

# Data models
from .models import (
    AliasRule,
    Component,
    ComponentList,
    DeployConfig,
    DeploymentOutcome,
    DeploymentStatus,
    HealthOutcome,
    HealthStatus,
    RunResult,
)

# Exceptions
from .api.exceptions import (
    ComponentDeployError,
    ConfigError,
    ArtifactSourceError,
    PreconditionError,
    VersionStoreError,
    NoPreviousVersionError,
    HealthCheckError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "ArtifactLocator",
    "VersionStore",
    "DeploymentEngine",
    "PluginSynchronizer",
    "ReadinessWaiter",
    "HealthVerifier",
    "ServerController",
    "ConfigService",
    "DeployService",
    "ReportService",

    # Data models
    "AliasRule",
    "Component",
    "ComponentList",
    "DeployConfig",
    "DeploymentOutcome",
    "DeploymentStatus",
    "HealthOutcome",
    "HealthStatus",
    "RunResult",

    # Exceptions
    "ComponentDeployError",
    "ConfigError",
    "ArtifactSourceError",
    "PreconditionError",
    "VersionStoreError",
    "NoPreviousVersionError",
    "HealthCheckError",
]
