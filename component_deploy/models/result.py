"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any


class DeploymentStatus(Enum):
    """Per-component deployment outcome"""
    DEPLOYED = "deployed"
    SKIPPED = "skipped"
    FAILED = "failed"


class HealthStatus(Enum):
    """Per-component health outcome"""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def label(self) -> str:
        """Summary-file label (OK / FAILED / SKIPPED)"""
        return "OK" if self is HealthStatus.PASSED else self.name


@dataclass(frozen=True)
class DeploymentOutcome:
    """Immutable record of one component's deployment"""

    component: str
    status: DeploymentStatus
    message: str = ""
    version: Optional[str] = None
    previous_version: Optional[str] = None
    artifact: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def deployed(cls, component: str, version: str, artifact: str,
                 previous_version: Optional[str] = None) -> 'DeploymentOutcome':
        return cls(component, DeploymentStatus.DEPLOYED, f"Deployed {version}",
                   version=version, previous_version=previous_version, artifact=artifact)

    @classmethod
    def skipped(cls, component: str, message: str, version: Optional[str] = None,
                error_code: Optional[str] = None) -> 'DeploymentOutcome':
        return cls(component, DeploymentStatus.SKIPPED, message, version=version,
                   error_code=error_code)

    @classmethod
    def failed(cls, component: str, message: str,
               error_code: Optional[str] = None) -> 'DeploymentOutcome':
        return cls(component, DeploymentStatus.FAILED, message, error_code=error_code)

    @property
    def is_deployed(self) -> bool:
        return self.status == DeploymentStatus.DEPLOYED

    @property
    def is_failed(self) -> bool:
        return self.status == DeploymentStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "component": self.component,
            "status": self.status.value,
            "message": self.message,
            "version": self.version,
            "previous_version": self.previous_version,
            "artifact": self.artifact,
            "error_code": self.error_code,
        }


@dataclass(frozen=True)
class HealthOutcome:
    """Immutable record of one component's health check"""

    component: str
    status: HealthStatus
    path: Optional[Path] = None
    message: str = ""
    output: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "component": self.component,
            "status": self.status.value,
            "path": str(self.path) if self.path else None,
            "message": self.message,
        }


@dataclass
class PluginSyncResult:
    """Result of a plugin directory refresh"""

    ran: bool = False
    backup_dir: Optional[Path] = None
    backed_up: List[str] = field(default_factory=list)
    copied: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ran": self.ran,
            "backup_dir": str(self.backup_dir) if self.backup_dir else None,
            "backed_up": list(self.backed_up),
            "copied": list(self.copied),
            "missing": list(self.missing),
            "message": self.message,
        }


@dataclass
class ReadinessResult:
    """Result of waiting for the service port"""

    ready: bool
    waited: float = 0.0
    mechanism: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ready": self.ready, "waited": self.waited, "mechanism": self.mechanism}


@dataclass
class RestartResult:
    """Result of the application server restart sequence"""

    performed: bool = False
    steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"performed": self.performed, "steps": list(self.steps), "warnings": list(self.warnings)}


@dataclass
class RunResult:
    """Everything one invocation produced, in invocation order"""

    branch: str
    requested: str
    components: List[str] = field(default_factory=list)
    unknown_components: List[str] = field(default_factory=list)
    deployments: List[DeploymentOutcome] = field(default_factory=list)
    health: List[HealthOutcome] = field(default_factory=list)
    plugin_sync: PluginSyncResult = field(default_factory=PluginSyncResult)
    restart: RestartResult = field(default_factory=RestartResult)
    readiness: Optional[ReadinessResult] = None
    log_file: Optional[Path] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    def _deployments_with(self, status: DeploymentStatus) -> List[str]:
        return [o.component for o in self.deployments if o.status == status]

    def _health_with(self, status: HealthStatus) -> List[str]:
        return [o.component for o in self.health if o.status == status]

    @property
    def deployed(self) -> List[str]:
        return self._deployments_with(DeploymentStatus.DEPLOYED)

    @property
    def skipped(self) -> List[str]:
        return self._deployments_with(DeploymentStatus.SKIPPED)

    @property
    def failed(self) -> List[str]:
        return self._deployments_with(DeploymentStatus.FAILED)

    @property
    def health_passed(self) -> List[str]:
        return self._health_with(HealthStatus.PASSED)

    @property
    def health_skipped(self) -> List[str]:
        return self._health_with(HealthStatus.SKIPPED)

    @property
    def health_failed(self) -> List[str]:
        return self._health_with(HealthStatus.FAILED)

    @property
    def restart_needed(self) -> bool:
        return any(o.is_deployed for o in self.deployments)

    @property
    def has_failures(self) -> bool:
        """Only deployment failures count; health results never do"""
        return any(o.is_failed for o in self.deployments)

    @property
    def exit_code(self) -> int:
        return 1 if self.has_failures else 0

    @property
    def duration(self) -> Optional[float]:
        """Get run duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def complete(self) -> None:
        """Mark run as complete"""
        self.end_time = datetime.now()

    def health_for(self, component: str) -> Optional[HealthOutcome]:
        for outcome in self.health:
            if outcome.component == component:
                return outcome
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "branch": self.branch,
            "requested": self.requested,
            "components": list(self.components),
            "unknown_components": list(self.unknown_components),
            "deployments": [o.to_dict() for o in self.deployments],
            "health": [o.to_dict() for o in self.health],
            "plugin_sync": self.plugin_sync.to_dict(),
            "restart": self.restart.to_dict(),
            "readiness": self.readiness.to_dict() if self.readiness else None,
            "log_file": str(self.log_file) if self.log_file else None,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "exit_code": self.exit_code,
        }
