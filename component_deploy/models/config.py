"""Configuration data models"""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any, Union

from .component import AliasRule
from ..constants import (
    DEFAULT_WAR_BASE,
    DEFAULT_LIST_FILE,
    DEFAULT_PLUGIN_DIR_NAME,
    DEFAULT_BACKUP_DIR_TEMPLATE,
    DEFAULT_LOG_DIR,
    DEFAULT_CACHE_PATHS,
    DEFAULT_TRUNK_KEYWORD,
    DEFAULT_TRUNK_NAME,
    DEFAULT_BRANCH_PREFIX,
    DEFAULT_REMOTE_HOST,
    DEFAULT_REMOTE_USER,
    DEFAULT_KEY_FILE,
    DEFAULT_ARCHIVE_ROOT,
    DEFAULT_SOURCE_TEMPLATE,
    DEFAULT_ARTIFACT_EXTENSION,
    DEFAULT_PLUGIN_GLOB,
    DEFAULT_REMOTE_TIMEOUT,
    DEFAULT_OWNER,
    DEFAULT_GROUP,
    DEFAULT_STOP_COMMAND,
    DEFAULT_PROCESS_PATTERN,
    DEFAULT_STOP_GRACE,
    DEFAULT_KILL_GRACE,
    DEFAULT_WORK_DIR,
    DEFAULT_SERVICE_HOST,
    DEFAULT_SERVICE_PORT,
    DEFAULT_READINESS_TIMEOUT,
    DEFAULT_READINESS_INTERVAL,
    DEFAULT_HEALTH_COMMAND,
    DEFAULT_HEALTH_USER,
    DEFAULT_HEALTH_HOST,
    DEFAULT_HEALTH_TIMEOUT,
    DEFAULT_CRITICAL_MARKER,
    DEFAULT_STATUS_FILE,
    DEFAULT_SUMMARY_FILE,
    DEFAULT_REPORT_PATH,
    DEFAULT_MAIL_FROM,
    DEFAULT_SUBJECT_TEMPLATE,
    DEFAULT_SENDMAIL_COMMAND,
    DEFAULT_MAIL_TIMEOUT,
)

ENV_HEALTH_PASSWORD = "COMPONENT_DEPLOY_HEALTH_PASSWORD"


def _as_command(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """Accept commands as argument lists or shell-style strings"""
    if value is None:
        return None
    if isinstance(value, str):
        return shlex.split(value)
    return [str(arg) for arg in value]


def _as_list(value: Union[str, List[str], None]) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(value)


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value).expanduser() if value else None


@dataclass
class PathsConfig:
    """Local filesystem layout on the application server"""

    war_base: Path = Path(DEFAULT_WAR_BASE)
    list_file: Path = Path(DEFAULT_LIST_FILE)
    plugin_dir: Optional[Path] = None
    backup_dir_template: str = DEFAULT_BACKUP_DIR_TEMPLATE
    log_dir: Optional[Path] = Path(DEFAULT_LOG_DIR)
    cache_paths: List[str] = field(default_factory=lambda: list(DEFAULT_CACHE_PATHS))

    def __post_init__(self):
        """Normalize path fields"""
        self.war_base = Path(self.war_base)
        self.list_file = Path(self.list_file)
        if self.plugin_dir is None:
            self.plugin_dir = self.war_base / DEFAULT_PLUGIN_DIR_NAME
        else:
            self.plugin_dir = Path(self.plugin_dir)
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "war_base": str(self.war_base),
            "list_file": str(self.list_file),
            "plugin_dir": str(self.plugin_dir),
            "backup_dir_template": self.backup_dir_template,
            "log_dir": str(self.log_dir) if self.log_dir else None,
            "cache_paths": list(self.cache_paths),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PathsConfig':
        log_dir = data.get("log_dir", DEFAULT_LOG_DIR)
        return cls(
            war_base=Path(data.get("war_base", DEFAULT_WAR_BASE)),
            list_file=Path(data.get("list_file", DEFAULT_LIST_FILE)),
            plugin_dir=_optional_path(data.get("plugin_dir")),
            backup_dir_template=data.get("backup_dir_template", DEFAULT_BACKUP_DIR_TEMPLATE),
            log_dir=Path(log_dir) if log_dir else None,
            cache_paths=_as_list(data.get("cache_paths", DEFAULT_CACHE_PATHS)),
        )


@dataclass
class BranchConfig:
    """Mapping from the branch argument to the build job name"""

    trunk_keyword: str = DEFAULT_TRUNK_KEYWORD
    trunk_name: str = DEFAULT_TRUNK_NAME
    prefix: str = DEFAULT_BRANCH_PREFIX

    def resolve(self, branch_input: str) -> str:
        """Resolve "trunk" or a branch suffix into the job branch name"""
        if branch_input == self.trunk_keyword:
            return self.trunk_name
        return f"{self.prefix}{branch_input}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trunk_keyword": self.trunk_keyword,
            "trunk_name": self.trunk_name,
            "prefix": self.prefix,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BranchConfig':
        return cls(
            trunk_keyword=data.get("trunk_keyword", DEFAULT_TRUNK_KEYWORD),
            trunk_name=data.get("trunk_name", DEFAULT_TRUNK_NAME),
            prefix=data.get("prefix", DEFAULT_BRANCH_PREFIX),
        )


@dataclass
class RemoteConfig:
    """Upstream artifact archive (build server)"""

    type: str = "ssh"  # ssh, filesystem
    host: str = DEFAULT_REMOTE_HOST
    user: str = DEFAULT_REMOTE_USER
    key_file: Optional[str] = DEFAULT_KEY_FILE
    archive_root: str = DEFAULT_ARCHIVE_ROOT
    source_template: str = DEFAULT_SOURCE_TEMPLATE
    extension: str = DEFAULT_ARTIFACT_EXTENSION
    strict_host_key_checking: bool = True
    timeout: int = DEFAULT_REMOTE_TIMEOUT

    def __post_init__(self):
        """Validate remote configuration"""
        if self.type not in ("ssh", "filesystem"):
            raise ValueError(f"Unsupported remote type: {self.type}")
        if self.type == "ssh" and not self.host:
            raise ValueError("ssh remote requires 'host'")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "host": self.host,
            "user": self.user,
            "key_file": self.key_file,
            "archive_root": self.archive_root,
            "source_template": self.source_template,
            "extension": self.extension,
            "strict_host_key_checking": self.strict_host_key_checking,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RemoteConfig':
        return cls(
            type=data.get("type", "ssh"),
            host=data.get("host", DEFAULT_REMOTE_HOST),
            user=data.get("user", DEFAULT_REMOTE_USER),
            key_file=data.get("key_file", DEFAULT_KEY_FILE),
            archive_root=data.get("archive_root", DEFAULT_ARCHIVE_ROOT),
            source_template=data.get("source_template", DEFAULT_SOURCE_TEMPLATE),
            extension=data.get("extension", DEFAULT_ARTIFACT_EXTENSION),
            strict_host_key_checking=data.get("strict_host_key_checking", True),
            timeout=int(data.get("timeout", DEFAULT_REMOTE_TIMEOUT)),
        )


@dataclass
class PluginConfig:
    """Plugin artifacts location relative to the archive root"""

    source_template: str = DEFAULT_SOURCE_TEMPLATE
    file_glob: str = DEFAULT_PLUGIN_GLOB

    def to_dict(self) -> Dict[str, Any]:
        return {"source_template": self.source_template, "file_glob": self.file_glob}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PluginConfig':
        return cls(
            source_template=data.get("source_template", DEFAULT_SOURCE_TEMPLATE),
            file_glob=data.get("file_glob", DEFAULT_PLUGIN_GLOB),
        )


@dataclass
class OwnershipConfig:
    """Owner applied to deployed trees (chown -R user:group)"""

    user: Optional[str] = DEFAULT_OWNER
    group: Optional[str] = DEFAULT_GROUP
    enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"user": self.user, "group": self.group, "enabled": self.enabled}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OwnershipConfig':
        return cls(
            user=data.get("user", DEFAULT_OWNER),
            group=data.get("group", DEFAULT_GROUP),
            enabled=data.get("enabled", True),
        )


@dataclass
class RestartConfig:
    """Application server restart sequence"""

    enabled: bool = True
    stop_command: Optional[List[str]] = field(default_factory=lambda: list(DEFAULT_STOP_COMMAND))
    start_command: Optional[List[str]] = None
    process_pattern: Optional[str] = DEFAULT_PROCESS_PATTERN
    stop_grace: float = DEFAULT_STOP_GRACE
    kill_grace: float = DEFAULT_KILL_GRACE
    work_dir: Optional[Path] = Path(DEFAULT_WORK_DIR)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "stop_command": self.stop_command,
            "start_command": self.start_command,
            "process_pattern": self.process_pattern,
            "stop_grace": self.stop_grace,
            "kill_grace": self.kill_grace,
            "work_dir": str(self.work_dir) if self.work_dir else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RestartConfig':
        return cls(
            enabled=data.get("enabled", True),
            stop_command=_as_command(data.get("stop_command", DEFAULT_STOP_COMMAND)),
            start_command=_as_command(data.get("start_command")),
            process_pattern=data.get("process_pattern", DEFAULT_PROCESS_PATTERN),
            stop_grace=float(data.get("stop_grace", DEFAULT_STOP_GRACE)),
            kill_grace=float(data.get("kill_grace", DEFAULT_KILL_GRACE)),
            work_dir=_optional_path(data.get("work_dir", DEFAULT_WORK_DIR)),
        )


@dataclass
class ReadinessConfig:
    """Service port polling"""

    host: str = DEFAULT_SERVICE_HOST
    port: int = DEFAULT_SERVICE_PORT
    timeout: float = DEFAULT_READINESS_TIMEOUT
    interval: float = DEFAULT_READINESS_INTERVAL

    def __post_init__(self):
        """Validate polling bounds"""
        if self.interval <= 0:
            raise ValueError("readiness interval must be positive")
        if self.timeout < 0:
            raise ValueError("readiness timeout must not be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {"host": self.host, "port": self.port, "timeout": self.timeout, "interval": self.interval}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReadinessConfig':
        return cls(
            host=data.get("host", DEFAULT_SERVICE_HOST),
            port=int(data.get("port", DEFAULT_SERVICE_PORT)),
            timeout=float(data.get("timeout", DEFAULT_READINESS_TIMEOUT)),
            interval=float(data.get("interval", DEFAULT_READINESS_INTERVAL)),
        )


@dataclass
class HealthConfig:
    """External health probe"""

    command: List[str] = field(default_factory=lambda: list(DEFAULT_HEALTH_COMMAND))
    user: str = DEFAULT_HEALTH_USER
    password: str = ""
    host: str = DEFAULT_HEALTH_HOST
    port: int = DEFAULT_SERVICE_PORT
    timeout: float = DEFAULT_HEALTH_TIMEOUT
    critical_marker: str = DEFAULT_CRITICAL_MARKER
    status_file: Optional[Path] = Path(DEFAULT_STATUS_FILE)
    summary_file: Optional[Path] = Path(DEFAULT_SUMMARY_FILE)

    def to_dict(self) -> Dict[str, Any]:
        # password is never written back
        return {
            "command": self.command,
            "user": self.user,
            "host": self.host,
            "port": self.port,
            "timeout": self.timeout,
            "critical_marker": self.critical_marker,
            "status_file": str(self.status_file) if self.status_file else None,
            "summary_file": str(self.summary_file) if self.summary_file else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HealthConfig':
        return cls(
            command=_as_command(data.get("command", DEFAULT_HEALTH_COMMAND)),
            user=data.get("user", DEFAULT_HEALTH_USER),
            password=data.get("password", os.environ.get(ENV_HEALTH_PASSWORD, "")),
            host=data.get("host", DEFAULT_HEALTH_HOST),
            port=int(data.get("port", DEFAULT_SERVICE_PORT)),
            timeout=float(data.get("timeout", DEFAULT_HEALTH_TIMEOUT)),
            critical_marker=data.get("critical_marker", DEFAULT_CRITICAL_MARKER),
            status_file=_optional_path(data.get("status_file", DEFAULT_STATUS_FILE)),
            summary_file=_optional_path(data.get("summary_file", DEFAULT_SUMMARY_FILE)),
        )


@dataclass
class ReportConfig:
    """HTML report and mail delivery"""

    enabled: bool = True
    html_path: Optional[Path] = Path(DEFAULT_REPORT_PATH)
    mail_to: List[str] = field(default_factory=list)
    mail_from: str = DEFAULT_MAIL_FROM
    subject_template: str = DEFAULT_SUBJECT_TEMPLATE
    sendmail_command: List[str] = field(default_factory=lambda: list(DEFAULT_SENDMAIL_COMMAND))
    mail_timeout: float = DEFAULT_MAIL_TIMEOUT

    @property
    def mail_enabled(self) -> bool:
        return self.enabled and bool(self.mail_to)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "html_path": str(self.html_path) if self.html_path else None,
            "mail_to": list(self.mail_to),
            "mail_from": self.mail_from,
            "subject_template": self.subject_template,
            "sendmail_command": self.sendmail_command,
            "mail_timeout": self.mail_timeout,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReportConfig':
        return cls(
            enabled=data.get("enabled", True),
            html_path=_optional_path(data.get("html_path", DEFAULT_REPORT_PATH)),
            mail_to=_as_list(data.get("mail_to")),
            mail_from=data.get("mail_from", DEFAULT_MAIL_FROM),
            subject_template=data.get("subject_template", DEFAULT_SUBJECT_TEMPLATE),
            sendmail_command=_as_command(data.get("sendmail_command", DEFAULT_SENDMAIL_COMMAND)),
            mail_timeout=float(data.get("mail_timeout", DEFAULT_MAIL_TIMEOUT)),
        )


# Components whose build output or on-disk layout does not follow their name
DEFAULT_ALIASES: Dict[str, AliasRule] = {
    "AdminEdgeV2": AliasRule(
        artifact_source="AdminEdgeRoot/AdminEdgeV2/build/libs",
        destination="AdminEdge",
    ),
    "depositengine": AliasRule(
        artifact_source="DepositEngine/target",
        create_destination=True,
    ),
    "DepositEngineV3": AliasRule(health_check_path="depositengine"),
    "GeoIPIntegration": AliasRule(health_check_path="geoIPIntegration"),
    "birt-viewer": AliasRule(health_check_path="webapps/birt-viewer"),
}


@dataclass
class DeployConfig:
    """Complete deployment configuration"""

    paths: PathsConfig = field(default_factory=PathsConfig)
    branch: BranchConfig = field(default_factory=BranchConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    plugins: PluginConfig = field(default_factory=PluginConfig)
    ownership: OwnershipConfig = field(default_factory=OwnershipConfig)
    restart: RestartConfig = field(default_factory=RestartConfig)
    readiness: ReadinessConfig = field(default_factory=ReadinessConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    aliases: Dict[str, AliasRule] = field(default_factory=lambda: dict(DEFAULT_ALIASES))

    def alias_for(self, name: str) -> Optional[AliasRule]:
        """Get the alias rule of a component, if any"""
        return self.aliases.get(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "paths": self.paths.to_dict(),
            "branch": self.branch.to_dict(),
            "remote": self.remote.to_dict(),
            "plugins": self.plugins.to_dict(),
            "ownership": self.ownership.to_dict(),
            "restart": self.restart.to_dict(),
            "readiness": self.readiness.to_dict(),
            "health": self.health.to_dict(),
            "report": self.report.to_dict(),
            "aliases": {name: rule.to_dict() for name, rule in self.aliases.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'DeployConfig':
        """Create from dictionary

        A present "aliases" mapping replaces the built-in table entirely.
        """
        data = data or {}
        if "aliases" in data:
            aliases = {
                name: AliasRule.from_dict(rule)
                for name, rule in (data.get("aliases") or {}).items()
            }
        else:
            aliases = dict(DEFAULT_ALIASES)

        return cls(
            paths=PathsConfig.from_dict(data.get("paths") or {}),
            branch=BranchConfig.from_dict(data.get("branch") or {}),
            remote=RemoteConfig.from_dict(data.get("remote") or {}),
            plugins=PluginConfig.from_dict(data.get("plugins") or {}),
            ownership=OwnershipConfig.from_dict(data.get("ownership") or {}),
            restart=RestartConfig.from_dict(data.get("restart") or {}),
            readiness=ReadinessConfig.from_dict(data.get("readiness") or {}),
            health=HealthConfig.from_dict(data.get("health") or {}),
            report=ReportConfig.from_dict(data.get("report") or {}),
            aliases=aliases,
        )
