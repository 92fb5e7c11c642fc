"""Configuration management service"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import DEFAULT_CONFIG_PATH, ENV_CONFIG_PATH
from ..models.config import DeployConfig


class ConfigService:
    """Service for locating and loading the deployment configuration"""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config service

        Args:
            config_path: Explicit configuration file. When omitted the
                COMPONENT_DEPLOY_CONFIG environment variable is consulted,
                then the system-wide default location.
        """
        self.explicit = config_path is not None or bool(os.environ.get(ENV_CONFIG_PATH))
        if config_path is not None:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path(os.environ.get(ENV_CONFIG_PATH) or DEFAULT_CONFIG_PATH)
        self._config: Optional[DeployConfig] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def config(self) -> DeployConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self) -> DeployConfig:
        """Load configuration from file

        Returns:
            Loaded configuration (built-in defaults when the default file
            is absent)

        Raises:
            ConfigError: If an explicitly named file is missing or any
                file is unreadable or invalid
        """
        if not self.config_path.exists():
            if self.explicit:
                raise ConfigError(f"Configuration file not found: {self.config_path}")
            self.logger.debug(f"No configuration at {self.config_path}, using defaults")
            self._config = DeployConfig()
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read configuration {self.config_path}: {e}")

        # Expand environment variables in the file
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}")

        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {self.config_path}")

        try:
            self._config = DeployConfig.from_dict(data)
        except (ValueError, TypeError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}")

        self.logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config

