"""Run reporting: log summary, HTML report and mail delivery"""

import html
import logging
import socket
import subprocess
from datetime import datetime
from email.message import EmailMessage
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..core.component_list import ComponentResolver
from ..core.version_store import VersionStore
from ..models.config import DeployConfig
from ..models.result import HealthStatus, RunResult
from ..utils.template_utils import render_tokens

_CELL = "border: 1px solid #ddd; padding: 8px;"


def _names(names: List[str]) -> str:
    return " ".join(names) if names else "None"


def short_hostname() -> str:
    return socket.gethostname().split(".")[0]


class ReportService:
    """Renders a finished RunResult for humans"""

    def __init__(
        self,
        config: DeployConfig,
        hostname: Optional[str] = None,
        runner: Callable = subprocess.run,
        now: Callable[[], datetime] = datetime.now
    ):
        self.config = config
        self.hostname = hostname or short_hostname()
        self.runner = runner
        self.now = now
        self.resolver = ComponentResolver(config)
        self.version_store = VersionStore(config.paths.war_base, config.remote.extension)
        self.logger = logging.getLogger(self.__class__.__name__)

    def summary_lines(self, result: RunResult) -> List[str]:
        """Plain deployment and health summary, "None" for empty groups"""
        lines = [
            "===== Deployment Summary =====",
            f"Components attempted: {_names(result.components)}",
            f"Deployed successfully: {_names(result.deployed)}",
            f"Skipped: {_names(result.skipped)}",
            f"Failed: {_names(result.failed)}",
        ]
        if result.unknown_components:
            lines.append(f"Not in component list: {_names(result.unknown_components)}")
        if result.plugin_sync.ran:
            lines.append(f"Plugins: {result.plugin_sync.message}")
        if result.health:
            lines.extend([
                "===== Health Check Summary =====",
                f"Health check passed: {_names(result.health_passed)}",
                f"Health check skipped: {_names(result.health_skipped)}",
                f"Health check failed: {_names(result.health_failed)}",
            ])
        return lines

    def log_summary(self, result: RunResult) -> None:
        for line in self.summary_lines(result):
            self.logger.info(line)

    def deployed_version(self, name: str) -> str:
        """Marker contents for a component, "N/A" when absent"""
        destination = self.resolver.resolve(name).destination_name
        return self.version_store.marker(destination) or "N/A"

    def health_labels(self, result: RunResult) -> Dict[str, str]:
        labels = {}
        for name in result.components:
            outcome = result.health_for(name)
            labels[name] = outcome.status.label if outcome else "UNKNOWN"
        return labels

    def render_html(self, result: RunResult) -> str:
        """Build the HTML report body"""
        date = self.now().strftime("%Y-%m-%d %H:%M:%S")
        log_file = f"{self.hostname}:{result.log_file}" if result.log_file else "N/A"
        esc = html.escape

        parts = [
            "<html><body style='font-family: Arial, sans-serif;'>",
            "<h2>Deployment Report</h2>",
            f"<p><strong>Server:</strong> {esc(self.hostname)}<br>",
            f"<strong>Branch:</strong> {esc(result.branch)}<br>",
            f"<strong>Date:</strong> {date}<br>",
            f"<strong>Log file:</strong> {esc(log_file)}</p>",
            "<h3>Component Summary</h3>",
            "<ul>",
            f"<li><strong>Attempted:</strong> {esc(_names(result.components))}</li>",
            f"<li><strong>Deployed:</strong> {esc(_names(result.deployed))}</li>",
            f"<li><strong>Skipped:</strong> {esc(_names(result.skipped))}</li>",
            f"<li><strong style='color:red;'>Failed:</strong> {esc(_names(result.failed))}</li>",
            "</ul>",
            "<h3>Application Health Status</h3>",
            "<table style='border-collapse: collapse; width: 70%;'>",
            f"<tr><th style='{_CELL} text-align:left;'>Application</th>"
            f"<th style='{_CELL}'>Status</th><th style='{_CELL}'>Version</th></tr>",
        ]

        for name, label in self.health_labels(result).items():
            color = "green" if label == HealthStatus.PASSED.label else "red"
            parts.extend([
                "<tr>",
                f"<td style='{_CELL}'>{esc(name)}</td>",
                f"<td style='{_CELL}'><span style='color:{color};font-weight:bold;'>{label}</span></td>",
                f"<td style='{_CELL}'>{esc(self.deployed_version(name))}</td>",
                "</tr>",
            ])
        parts.append("</table>")

        if result.has_failures:
            parts.append("<p style='color:red;font-weight:bold;'>Deployment completed with errors</p>")
        else:
            parts.append("<p style='color:green;font-weight:bold;'>Deployment completed successfully</p>")

        parts.extend([
            "<h3>Notes</h3>",
            "<ul>",
            "<li>Skipped components were already on the latest version or not present on this server.</li>",
            "<li>For full details, check the log file listed above.</li>",
            "</ul>",
            "</body></html>",
        ])
        return "\n".join(parts)

    def write_html(self, result: RunResult) -> Optional[Path]:
        """Write the HTML report; returns its path, or None when not written"""
        path = self.config.report.html_path
        if path is None:
            return None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.render_html(result), encoding="utf-8")
        except OSError as e:
            self.logger.error(f"Cannot write report {path}: {e}")
            return None
        self.logger.info(f"Report written to {path}")
        return path

    def subject(self, result: RunResult) -> str:
        return render_tokens(self.config.report.subject_template, {
            "BRANCH": result.branch,
            "HOST": self.hostname,
            "DATE": self.now().strftime("%Y-%m-%d %H:%M:%S"),
        })

    def build_message(self, result: RunResult) -> EmailMessage:
        report = self.config.report
        message = EmailMessage()
        message["Subject"] = self.subject(result)
        message["From"] = report.mail_from
        message["To"] = ", ".join(report.mail_to)
        message.set_content(self.render_html(result), subtype="html")
        return message

    def send_mail(self, result: RunResult) -> bool:
        """Pipe the report to sendmail; failures are logged only"""
        if not self.config.report.mail_enabled:
            self.logger.debug("Mail delivery disabled")
            return False

        message = self.build_message(result)
        command = self.config.report.sendmail_command
        timeout = self.config.report.mail_timeout
        try:
            completed = self.runner(command, input=message.as_bytes(), capture_output=True,
                                    timeout=timeout)
        except subprocess.TimeoutExpired:
            self.logger.warning(f"{command[0]} did not finish within {timeout:g}s, report not mailed")
            return False
        except OSError as e:
            self.logger.warning(f"Cannot run {command[0]}: {e}")
            return False

        if completed.returncode != 0:
            self.logger.warning(f"{command[0]} exited {completed.returncode}, report not mailed")
            return False

        self.logger.info(f"Report mailed to {', '.join(self.config.report.mail_to)}")
        return True

    def publish(self, result: RunResult, mail: bool = True) -> None:
        """Log the summary, write the HTML report and mail it"""
        self.log_summary(result)
        if not self.config.report.enabled:
            return
        self.write_html(result)
        if mail:
            self.send_mail(result)
