"""Data models for component-deploy"""

from .component import AliasRule, Component, ComponentList
from .config import (
    DeployConfig,
    PathsConfig,
    BranchConfig,
    RemoteConfig,
    PluginConfig,
    OwnershipConfig,
    RestartConfig,
    ReadinessConfig,
    HealthConfig,
    ReportConfig,
    DEFAULT_ALIASES,
)
from .result import (
    DeploymentStatus,
    HealthStatus,
    DeploymentOutcome,
    HealthOutcome,
    PluginSyncResult,
    ReadinessResult,
    RestartResult,
    RunResult,
)

__all__ = [
    # Component models
    "AliasRule",
    "Component",
    "ComponentList",

    # Config models
    "DeployConfig",
    "PathsConfig",
    "BranchConfig",
    "RemoteConfig",
    "PluginConfig",
    "OwnershipConfig",
    "RestartConfig",
    "ReadinessConfig",
    "HealthConfig",
    "ReportConfig",
    "DEFAULT_ALIASES",

    # Result models
    "DeploymentStatus",
    "HealthStatus",
    "DeploymentOutcome",
    "HealthOutcome",
    "PluginSyncResult",
    "ReadinessResult",
    "RestartResult",
    "RunResult",
]
