"""Exception definitions for component-deploy"""

from ..constants import ErrorCode


class ComponentDeployError(Exception):
    """Base exception for component-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(ComponentDeployError):
    """Configuration error, fatal to the whole run"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class ArtifactSourceError(ComponentDeployError):
    """Remote listing or transfer failed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.ARTIFACT_SOURCE_ERROR)


class PreconditionError(ComponentDeployError):
    """Expected local directory is missing"""

    def __init__(self, path):
        message = f"Missing directory: {path}"
        super().__init__(message, ErrorCode.PRECONDITION_FAILED)
        self.path = path


class VersionStoreError(ComponentDeployError):
    """Live pointer or marker could not be updated"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.VERSION_STORE_ERROR)


class NoPreviousVersionError(VersionStoreError):
    """Rollback requested but no previous pointer exists"""

    def __init__(self, name: str):
        super().__init__(f"No previous version recorded for {name}")
        self.error_code = ErrorCode.NO_PREVIOUS_VERSION
        self.name = name


class HealthCheckError(ComponentDeployError):
    """Health probe could not be executed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.HEALTH_CHECK_ERROR)
