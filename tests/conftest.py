"""Shared fixtures: a temporary war base, a filesystem archive and a config"""

from pathlib import Path
from typing import Callable, Iterable

import pytest

from component_deploy.models.config import (
    DeployConfig,
    HealthConfig,
    OwnershipConfig,
    PathsConfig,
    ReadinessConfig,
    RemoteConfig,
    ReportConfig,
    RestartConfig,
)
from component_deploy.storage.filesystem import FilesystemArtifactSource


@pytest.fixture
def war_base(tmp_path: Path) -> Path:
    path = tmp_path / "wars"
    path.mkdir()
    return path


@pytest.fixture
def archive(tmp_path: Path) -> Path:
    """Root of the fake build archive; jobs live in <archive>/<branch>/"""
    path = tmp_path / "archive"
    path.mkdir()
    return path


@pytest.fixture
def add_artifact(archive: Path) -> Callable[..., Path]:
    """Drop an artifact into <archive>/<branch>/<subdir>/<filename>"""

    def _add(subdir: str, filename: str, branch: str = "pala", content: str = None) -> Path:
        directory = archive / branch / subdir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(content if content is not None else f"content of {filename}")
        return path

    return _add


@pytest.fixture
def config(tmp_path: Path, war_base: Path, archive: Path) -> DeployConfig:
    return DeployConfig(
        paths=PathsConfig(
            war_base=war_base,
            list_file=tmp_path / "component_and_plugin_list",
            backup_dir_template=str(tmp_path / "backups" / "deposit_plugins_%Y%m%d%H%M"),
            log_dir=tmp_path / "logs",
        ),
        remote=RemoteConfig(
            type="filesystem",
            archive_root=f"{archive}/${{branch}}",
        ),
        ownership=OwnershipConfig(enabled=False),
        restart=RestartConfig(enabled=False),
        readiness=ReadinessConfig(timeout=0, interval=1),
        health=HealthConfig(
            command=["check_app", "-a", "${name}", "-p", "${password}"],
            password="secret",
            status_file=tmp_path / "status",
            summary_file=tmp_path / "summary.log",
        ),
        report=ReportConfig(html_path=tmp_path / "report.html"),
    )


@pytest.fixture
def source() -> FilesystemArtifactSource:
    return FilesystemArtifactSource()


@pytest.fixture
def write_list(config: DeployConfig) -> Callable[[Iterable[str]], Path]:
    """Write the component list file named by the config"""

    def _write(lines: Iterable[str]) -> Path:
        config.paths.list_file.write_text("\n".join(lines) + "\n")
        return config.paths.list_file

    return _write

