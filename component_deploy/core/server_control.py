"""Application server restart sequence"""

import logging
import os
import signal
import subprocess
import time
from typing import Callable, List, Optional

from ..models.config import RestartConfig
from ..models.result import RestartResult
from ..utils.file_utils import safe_remove


class ServerController:
    """Stops, cleans and (optionally) starts the application server

    Every step is best-effort: a failing step is recorded as a warning
    and the sequence continues.
    """

    def __init__(
        self,
        config: RestartConfig,
        runner: Callable = subprocess.run,
        sleep: Callable[[float], None] = time.sleep,
        kill: Callable[[int, int], None] = os.kill
    ):
        self.config = config
        self.runner = runner
        self.sleep = sleep
        self.kill = kill
        self.logger = logging.getLogger(self.__class__.__name__)

    def restart(self) -> RestartResult:
        result = RestartResult(performed=True)
        self.logger.info("===== Server Restart Initiated =====")

        if self.config.stop_command:
            self._run_step("stop", self.config.stop_command, result)
            self.sleep(self.config.stop_grace)

        if self.config.process_pattern:
            pids = self.find_pids()
            for pid in pids:
                try:
                    self.kill(pid, signal.SIGKILL)
                    result.steps.append(f"kill {pid}")
                except OSError as e:
                    result.warnings.append(f"kill {pid} failed: {e}")
            if pids:
                self.sleep(self.config.kill_grace)

        work_dir = self.config.work_dir
        if work_dir and work_dir.is_dir():
            for entry in work_dir.iterdir():
                safe_remove(entry)
            result.steps.append(f"cleared {work_dir}")

        if self.config.start_command:
            self._run_step("start", self.config.start_command, result)
        else:
            self.logger.info("No start command configured, server left stopped")

        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def find_pids(self) -> List[int]:
        """PIDs whose command line matches the configured pattern"""
        try:
            completed = self.runner(
                ["pgrep", "-f", self.config.process_pattern],
                capture_output=True,
                text=True
            )
        except OSError as e:
            self.logger.warning(f"Cannot list processes: {e}")
            return []

        own_pid = os.getpid()
        pids = []
        for line in (completed.stdout or "").split():
            if line.isdigit() and int(line) != own_pid:
                pids.append(int(line))
        return pids

    def _run_step(self, name: str, command: List[str], result: RestartResult) -> Optional[int]:
        self.logger.info(f"Running {name}: {' '.join(command)}")
        try:
            completed = self.runner(command, capture_output=True, text=True)
        except OSError as e:
            result.warnings.append(f"{name} failed: {e}")
            return None

        if completed.returncode != 0:
            result.warnings.append(
                f"{name} exited {completed.returncode}: {(completed.stderr or '').strip()}"
            )
        else:
            result.steps.append(name)
        return completed.returncode
