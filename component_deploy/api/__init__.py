"""Public API for component-deploy"""

from .exceptions import (
    ComponentDeployError,
    ConfigError,
    ArtifactSourceError,
    PreconditionError,
    VersionStoreError,
    NoPreviousVersionError,
    HealthCheckError,
)

__all__ = [
    "ComponentDeployError",
    "ConfigError",
    "ArtifactSourceError",
    "PreconditionError",
    "VersionStoreError",
    "NoPreviousVersionError",
    "HealthCheckError",
]
