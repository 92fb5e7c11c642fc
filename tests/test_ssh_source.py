"""Tests for the ssh/scp artifact source"""

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from component_deploy.api.exceptions import ArtifactSourceError
from component_deploy.storage.ssh import SSHArtifactSource, quote_glob


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def ssh():
    return SSHArtifactSource({"host": "build01", "key_file": "/keys/id_rsa"})


class TestCommands:

    def test_requires_host(self):
        with pytest.raises(ValueError):
            SSHArtifactSource({})

    def test_ssh_command(self, ssh):
        cmd = ssh.build_ssh_cmd("ls -1 /jobs")

        assert cmd[0] == "ssh"
        assert "BatchMode=yes" in cmd
        assert "StrictHostKeyChecking=yes" in cmd
        assert cmd[cmd.index("-i") + 1] == "/keys/id_rsa"
        assert cmd[-2:] == ["root@build01", "ls -1 /jobs"]

    def test_scp_command(self, tmp_path):
        ssh = SSHArtifactSource({"host": "build01", "user": "jenkins", "strict_host_key_checking": False})

        cmd = ssh.build_scp_cmd("/jobs/a.war", tmp_path / "a.war")

        assert cmd[:2] == ["scp", "-C"]
        assert "StrictHostKeyChecking=no" in cmd
        assert "-i" not in cmd
        assert cmd[-2:] == ["jenkins@build01:/jobs/a.war", str(tmp_path / "a.war")]

    @pytest.mark.parametrize("pattern, expected", [
        ("*.war", "*.war"),
        ("lobbyapi-*.war", "lobbyapi-*.war"),
        ("my plugin*.jar", "'my plugin'*.jar"),
    ])
    def test_quote_glob(self, pattern, expected):
        assert quote_glob(pattern) == expected


class TestTransfer:

    @patch("component_deploy.storage.ssh.subprocess.run")
    def test_list(self, mock_run, ssh):
        mock_run.return_value = completed(stdout="/jobs/a-1.0.war\n/jobs/a-1.1.war\n\n")

        assert ssh.list("/jobs/", "*.war") == ["/jobs/a-1.0.war", "/jobs/a-1.1.war"]
        remote_command = mock_run.call_args[0][0][-1]
        assert remote_command == "ls -1 /jobs/*.war 2>/dev/null"

    @patch("component_deploy.storage.ssh.subprocess.run")
    def test_no_match_is_empty(self, mock_run, ssh):
        mock_run.return_value = completed(returncode=2)

        assert ssh.list("/jobs", "*.war") == []

    @patch("component_deploy.storage.ssh.subprocess.run")
    def test_connection_failure(self, mock_run, ssh):
        mock_run.return_value = completed(returncode=255, stderr="Permission denied (publickey)")

        with pytest.raises(ArtifactSourceError, match="Permission denied"):
            ssh.list("/jobs", "*.war")

    @patch("component_deploy.storage.ssh.subprocess.run")
    def test_timeout(self, mock_run, ssh):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ssh", timeout=120)

        with pytest.raises(ArtifactSourceError, match="Timed out"):
            ssh.list("/jobs", "*.war")

    @patch("component_deploy.storage.ssh.subprocess.run")
    def test_fetch(self, mock_run, ssh, tmp_path):
        mock_run.return_value = completed()
        target = tmp_path / "staging" / "a.war"

        ssh.fetch("/jobs/a.war", target)

        assert target.parent.is_dir()
        assert mock_run.call_args[0][0][0] == "scp"

    @patch("component_deploy.storage.ssh.subprocess.run")
    def test_fetch_failure(self, mock_run, ssh, tmp_path):
        mock_run.return_value = completed(returncode=1, stderr="No such file")

        with pytest.raises(ArtifactSourceError, match="exit 1"):
            ssh.fetch("/jobs/a.war", Path(tmp_path) / "a.war")


class TestRealProcess:

    @pytest.fixture
    def fake_ssh(self, tmp_path, monkeypatch):
        """An ssh binary on PATH that prints a Latin-1 encoded listing"""
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        script = bin_dir / "ssh"
        script.write_text(
            f"#!{sys.executable}\n"
            "import sys\n"
            "sys.stdout.buffer.write(b'/jobs/plugin-1.0.jar\\n/jobs/caf\\xe9-2.0.jar\\n')\n"
        )
        script.chmod(0o755)
        monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
        return script

    def test_non_utf8_listing(self, fake_ssh):
        ssh = SSHArtifactSource({"host": "build01"})

        assert ssh.list("/jobs", "*.jar") == ["/jobs/plugin-1.0.jar", "/jobs/caf\ufffd-2.0.jar"]
