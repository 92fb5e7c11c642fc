"""Build server artifact source over ssh/scp

Provides thin wrappers around the ssh and scp binaries, authenticated with
a private key file.
"""

import logging
import os
import re
import shlex
import subprocess
from pathlib import Path
from typing import List, Dict, Any

from .base import ArtifactSource
from ..api.exceptions import ArtifactSourceError
from ..constants import DEFAULT_REMOTE_TIMEOUT

# ssh reserves this exit status for its own (connection/auth) failures
SSH_ERROR_EXIT = 255

_WILDCARD_RE = re.compile(r"([*?])")


def quote_glob(pattern: str) -> str:
    """Shell-quote the literal parts of a glob, leaving * and ? active"""
    parts = []
    for part in _WILDCARD_RE.split(pattern):
        if not part:
            continue
        parts.append(part if part in ("*", "?") else shlex.quote(part))
    return "".join(parts)


class SSHArtifactSource(ArtifactSource):
    """Artifact source on a build server reachable with ssh/scp"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Args:
            config: Configuration including:
                - host: Build server host name (required)
                - user: Remote user (default root)
                - key_file: Private key path (optional)
                - strict_host_key_checking: bool (default True)
                - timeout: Per-command timeout in seconds
        """
        super().__init__(config)
        self.host = self.config.get("host")
        if not self.host:
            raise ValueError("SSH artifact source requires 'host'")
        self.user = self.config.get("user", "root")
        key_file = self.config.get("key_file")
        self.key_file = os.path.expanduser(key_file) if key_file else None
        self.strict_host_key_checking = self.config.get("strict_host_key_checking", True)
        self.timeout = self.config.get("timeout", DEFAULT_REMOTE_TIMEOUT)
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def name(self) -> str:
        return f"{self.user}@{self.host}"

    def _common_options(self) -> List[str]:
        options = ["-o", "BatchMode=yes",
                   "-o", f"StrictHostKeyChecking={'yes' if self.strict_host_key_checking else 'no'}"]
        if self.key_file:
            options.extend(["-i", self.key_file])
        return options

    def build_ssh_cmd(self, remote_command: str) -> List[str]:
        """Build ssh command list"""
        return ["ssh", *self._common_options(), self.name, remote_command]

    def build_scp_cmd(self, remote_path: str, local_path: Path) -> List[str]:
        """Build scp download command list"""
        return ["scp", "-C", *self._common_options(),
                f"{self.name}:{remote_path}", str(local_path)]

    def _run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        self.logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(cmd, capture_output=True, text=True, errors="replace",
                                  timeout=self.timeout)
        except subprocess.TimeoutExpired:
            raise ArtifactSourceError(f"Timed out after {self.timeout}s: {cmd[0]} {self.name}")
        except OSError as e:
            raise ArtifactSourceError(f"Cannot run {cmd[0]}: {e}")

    def list(self, directory: str, pattern: str) -> List[str]:
        remote_command = f"ls -1 {shlex.quote(directory.rstrip('/'))}/{quote_glob(pattern)} 2>/dev/null"
        result = self._run(self.build_ssh_cmd(remote_command))

        if result.returncode == SSH_ERROR_EXIT:
            raise ArtifactSourceError(
                f"SSH listing on {self.name} failed: {result.stderr.strip()}"
            )

        # ls exits non-zero when nothing matches; that is an empty listing
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def fetch(self, remote_path: str, local_path: Path) -> None:
        local_path.parent.mkdir(parents=True, exist_ok=True)
        result = self._run(self.build_scp_cmd(remote_path, local_path))

        if result.returncode != 0:
            raise ArtifactSourceError(
                f"SCP download failed (exit {result.returncode}): {result.stderr.strip()}"
            )
