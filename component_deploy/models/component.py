"""Component data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import DEFAULT_ARTIFACT_EXTENSION
from ..utils.template_utils import render_template


@dataclass(frozen=True)
class AliasRule:
    """Name remapping for a component whose layout differs from its name

    Attributes:
        artifact_source: Archive sub-path that replaces the rendered source
            template (e.g. "AdminEdgeRoot/AdminEdgeV2/build/libs")
        destination: Local name the component deploys under
        health_check_path: Path, relative to the war base, checked before
            probing the component
        create_destination: Create the destination directory on demand.
            Defaults to True when a destination override is declared.
    """

    artifact_source: Optional[str] = None
    destination: Optional[str] = None
    health_check_path: Optional[str] = None
    create_destination: Optional[bool] = None

    @property
    def creates_destination(self) -> bool:
        if self.create_destination is not None:
            return self.create_destination
        return self.destination is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {}
        if self.artifact_source:
            data["artifact_source"] = self.artifact_source
        if self.destination:
            data["destination"] = self.destination
        if self.health_check_path:
            data["health_check_path"] = self.health_check_path
        if self.create_destination is not None:
            data["create_destination"] = self.create_destination
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'AliasRule':
        """Create from dictionary"""
        data = data or {}
        return cls(
            artifact_source=data.get("artifact_source"),
            destination=data.get("destination"),
            health_check_path=data.get("health_check_path"),
            create_destination=data.get("create_destination"),
        )


@dataclass(frozen=True)
class Component:
    """A named deployable unit, resolved against the configuration"""

    name: str
    artifact_base_dir: Path
    build_source_path: str
    destination_name: str
    health_check_dir: Path
    special_handling: Optional[AliasRule] = None
    extension: str = DEFAULT_ARTIFACT_EXTENSION

    @property
    def war_base(self) -> Path:
        return self.artifact_base_dir.parent

    @property
    def artifact_glob(self) -> str:
        """Remote filename pattern, always keyed by the component name"""
        return f"{self.name}-*.{self.extension}"

    @property
    def is_aliased(self) -> bool:
        return self.special_handling is not None

    @property
    def creates_destination(self) -> bool:
        return self.special_handling is not None and self.special_handling.creates_destination

    def resolve_build_path(self, branch: str) -> str:
        """Render the upstream archive directory for a branch"""
        return render_template(self.build_source_path, {"branch": branch, "name": self.name})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "artifact_base_dir": str(self.artifact_base_dir),
            "build_source_path": self.build_source_path,
            "destination_name": self.destination_name,
            "health_check_dir": str(self.health_check_dir),
            "special_handling": self.special_handling.to_dict() if self.special_handling else None,
        }


@dataclass
class ComponentList:
    """Parsed component and plugin pattern list"""

    components: List[str] = field(default_factory=list)
    plugin_patterns: List[str] = field(default_factory=list)
    source: Optional[Path] = None

    def __contains__(self, name: str) -> bool:
        return name in self.components
