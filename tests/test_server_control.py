"""Tests for the application server restart sequence"""

import os
import signal
import subprocess
from unittest.mock import Mock

import pytest

from component_deploy.models.config import RestartConfig
from component_deploy.core.server_control import ServerController


def fake_runner(pgrep_stdout="", stop_returncode=0):
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        if cmd[0] == "pgrep":
            return subprocess.CompletedProcess(cmd, 0 if pgrep_stdout else 1, pgrep_stdout, "")
        if cmd[-1] == "stop":
            return subprocess.CompletedProcess(cmd, stop_returncode, "", "stop failed" if stop_returncode else "")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    run.calls = calls
    return run


@pytest.fixture
def work_dir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    (path / "lobbyapi").mkdir()
    (path / "lobbyapi" / "page.class").write_text("x")
    (path / "stale.txt").write_text("x")
    return path


class TestServerController:

    def test_full_sequence(self, work_dir):
        config = RestartConfig(stop_command=["service", "tomcat", "stop"],
                               start_command=["service", "tomcat", "start"],
                               work_dir=work_dir)
        runner = fake_runner(pgrep_stdout="1234\n5678\n")
        kill = Mock()
        sleep = Mock()

        result = ServerController(config, runner=runner, sleep=sleep, kill=kill).restart()

        assert result.performed
        assert runner.calls[0] == ["service", "tomcat", "stop"]
        assert runner.calls[1] == ["pgrep", "-f", "java.*tomcat"]
        assert runner.calls[-1] == ["service", "tomcat", "start"]
        kill.assert_any_call(1234, signal.SIGKILL)
        kill.assert_any_call(5678, signal.SIGKILL)
        assert [c.args[0] for c in sleep.call_args_list] == [5, 2]
        assert list(work_dir.iterdir()) == []
        assert work_dir.is_dir()
        assert result.warnings == []

    def test_start_skipped_without_command(self, work_dir):
        config = RestartConfig(stop_command=["service", "tomcat", "stop"], work_dir=work_dir)
        runner = fake_runner()

        result = ServerController(config, runner=runner, sleep=Mock(), kill=Mock()).restart()

        assert ["service", "tomcat", "start"] not in runner.calls
        assert "stop" in result.steps

    def test_steps_are_best_effort(self, work_dir):
        config = RestartConfig(stop_command=["service", "tomcat", "stop"], work_dir=work_dir)
        runner = fake_runner(pgrep_stdout="1234\n", stop_returncode=1)
        kill = Mock(side_effect=ProcessLookupError("gone"))

        result = ServerController(config, runner=runner, sleep=Mock(), kill=kill).restart()

        assert len(result.warnings) == 2
        assert list(work_dir.iterdir()) == []

    def test_missing_stop_binary(self, work_dir):
        config = RestartConfig(stop_command=["/nonexistent/service", "tomcat", "stop"], work_dir=work_dir)

        def run(cmd, **kwargs):
            if cmd[0] == "pgrep":
                return subprocess.CompletedProcess(cmd, 1, "", "")
            raise FileNotFoundError(cmd[0])

        result = ServerController(config, runner=run, sleep=Mock(), kill=Mock()).restart()

        assert result.warnings and "stop failed" in result.warnings[0]
        assert list(work_dir.iterdir()) == []

    def test_own_process_is_never_killed(self):
        config = RestartConfig(stop_command=None, work_dir=None)
        runner = fake_runner(pgrep_stdout=f"{os.getpid()}\n42\n")

        pids = ServerController(config, runner=runner, sleep=Mock(), kill=Mock()).find_pids()

        assert pids == [42]
