"""Post-deploy health verification"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from ..api.exceptions import HealthCheckError
from ..models.component import Component
from ..models.config import HealthConfig
from ..models.result import HealthOutcome, HealthStatus
from ..utils.template_utils import render_command


class HealthVerifier:
    """Runs the external health probe for each component

    The health-check path comes from the component's alias rule (or its
    destination directory). Components whose path is missing are skipped.
    """

    def __init__(self, config: HealthConfig, runner: Callable = subprocess.run):
        self.config = config
        self.runner = runner
        self.logger = logging.getLogger(self.__class__.__name__)

    def build_command(self, component: Component) -> List[str]:
        return render_command(self.config.command, {
            "user": self.config.user,
            "password": self.config.password,
            "host": self.config.host,
            "port": self.config.port,
            "name": component.name,
        })

    def classify(self, output: str) -> HealthStatus:
        if self.config.critical_marker.lower() in output.lower():
            return HealthStatus.FAILED
        return HealthStatus.PASSED

    def verify(self, components: List[Component]) -> List[HealthOutcome]:
        """Check every component in order"""
        self.logger.info("===== Running Application Health Check =====")
        self._truncate(self.config.summary_file)

        outcomes = []
        for component in components:
            outcome = self.check(component)
            self._append_summary(outcome)
            outcomes.append(outcome)
        return outcomes

    def check(self, component: Component) -> HealthOutcome:
        """Check one component; never raises"""
        path = component.health_check_dir
        self._truncate(self.config.status_file)

        if not path.is_dir():
            message = f"directory {path} not present"
            self.logger.info(f"Skipping health check for {component.name}: {message}")
            return HealthOutcome(component.name, HealthStatus.SKIPPED, path, message)

        self.logger.info(f"Checking {component.name} status")
        try:
            output = self._probe(component)
        except HealthCheckError as e:
            self.logger.error(f"{component.name}: FAILED ({e})")
            return HealthOutcome(component.name, HealthStatus.FAILED, path, str(e))
        except Exception as e:
            self.logger.error(f"{component.name}: FAILED (unexpected probe error: {e})")
            self.logger.debug("Traceback:", exc_info=True)
            return HealthOutcome(component.name, HealthStatus.FAILED, path, f"Unexpected error: {e}")

        self._write_status(output)
        status = self.classify(output)
        if status is HealthStatus.FAILED:
            self.logger.error(f"{component.name}: FAILED")
        else:
            self.logger.info(f"{component.name}: OK")
        return HealthOutcome(component.name, status, path, output.strip().splitlines()[0] if output.strip() else "",
                             output)

    def _probe(self, component: Component) -> str:
        cmd = self.build_command(component)
        try:
            result = self.runner(cmd, capture_output=True, text=True, errors="replace",
                                 timeout=self.config.timeout)
        except subprocess.TimeoutExpired:
            raise HealthCheckError(f"health probe timed out after {self.config.timeout:g}s")
        except OSError as e:
            raise HealthCheckError(f"cannot run health probe {cmd[0]}: {e}")

        return (result.stdout or "") + (result.stderr or "")

    def _truncate(self, path: Optional[Path]) -> None:
        if path is None:
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
        except OSError as e:
            self.logger.warning(f"Cannot reset {path}: {e}")

    def _write_status(self, output: str) -> None:
        if self.config.status_file is None:
            return
        try:
            self.config.status_file.write_text(output, encoding="utf-8")
        except OSError as e:
            self.logger.warning(f"Cannot write {self.config.status_file}: {e}")

    def _append_summary(self, outcome: HealthOutcome) -> None:
        if self.config.summary_file is None:
            return
        try:
            with open(self.config.summary_file, "a", encoding="utf-8") as f:
                f.write(f"{outcome.component}: {outcome.status.label}\n")
        except OSError as e:
            self.logger.warning(f"Cannot append to {self.config.summary_file}: {e}")
