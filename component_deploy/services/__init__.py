"""Service layer for component-deploy"""

from .config_service import ConfigService
from .deploy_service import DeployService, ComponentStatus
from .report_service import ReportService

__all__ = [
    "ConfigService",
    "DeployService",
    "ComponentStatus",
    "ReportService",
]
