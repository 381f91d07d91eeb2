"""
Configuration manager for centralized configuration handling.

This module loads the kernel configuration from YAML files, with an
optional per-environment file merged over the base file.
"""

from typing import Dict, Any, Optional
import os
import yaml
from pathlib import Path

from .config_validator import ConfigValidator
from .environment_config import EnvironmentConfig

ENVIRONMENT_VARIABLE = "SERVICEKERNEL_ENV"
DEFAULT_ENVIRONMENT = "development"


class ConfigManager:
    """
    Manager for kernel configurations.

    ``base.yaml`` is required; ``<environment>.yaml`` is merged over it
    when present. Environment variable overrides are applied last and
    the result is validated once.
    """

    def __init__(
        self,
        config_dir: str = "config",
        environment: Optional[str] = None
    ):
        """
        Initialize the manager.

        Args:
            config_dir: Configuration directory path
            environment: Optional environment name, defaults to $SERVICEKERNEL_ENV
        """
        self.config_dir = Path(config_dir)
        self.environment = environment or os.getenv(ENVIRONMENT_VARIABLE, DEFAULT_ENVIRONMENT)
        self.validator = ConfigValidator()
        self._config: Optional[EnvironmentConfig] = None

    def load_config(self) -> EnvironmentConfig:
        """
        Load configuration from files.

        Returns:
            EnvironmentConfig: Loaded configuration

        Raises:
            FileNotFoundError: If base.yaml is not found
            ValueError: If configuration is invalid
        """
        if self._config is not None:
            return self._config

        base_config = self._load_yaml("base.yaml", required=True)
        env_config = self._load_yaml(f"{self.environment}.yaml", required=False)

        config = EnvironmentConfig(self._merge_configs(base_config, env_config))
        self.validator.validate_config(config.config)

        self._config = config
        return self._config

    def get_config(self) -> Dict[str, Any]:
        """
        Get the current configuration as a dictionary.

        Returns:
            Dict[str, Any]: Current configuration
        """
        return self.load_config().config

    def get_application_config(self) -> Dict[str, Any]:
        return self.get_config().get("application", {})

    def get_logging_config(self) -> Dict[str, Any]:
        return self.get_config().get("logging", {})

    def get_provider_paths(self) -> list:
        """
        Get the provider import paths.

        Returns:
            list: ``module:attribute`` strings in registration order
        """
        return list(self.get_config().get("providers") or [])

    def _load_yaml(self, filename: str, required: bool) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Args:
            filename: Configuration file name
            required: Whether a missing file is an error

        Returns:
            Dict[str, Any]: Loaded configuration, empty for an empty or
                missing optional file

        Raises:
            FileNotFoundError: If a required file is not found
        """
        file_path = self.config_dir / filename
        if not file_path.exists():
            if required:
                raise FileNotFoundError(f"Configuration file not found: {file_path}")
            return {}

        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {file_path}")
        return data

    def _merge_configs(
        self,
        base: Dict[str, Any],
        override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Merge two configurations recursively.

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Dict[str, Any]: Merged configuration
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result and
                isinstance(result[key], dict) and
                isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result
