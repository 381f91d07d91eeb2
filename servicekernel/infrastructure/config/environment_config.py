"""
Environment configuration for environment-specific settings.

This module applies environment variable overrides to the merged file
configuration and exposes typed accessors over the result.
"""

from typing import Dict, Any, List
import os

DEFAULT_APP_NAME = "servicekernel"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"


class EnvironmentConfig:
    """
    Environment-specific configuration.

    Recognized variables:
        SERVICEKERNEL_LOG_LEVEL: overrides ``logging.level``
        SERVICEKERNEL_APP_NAME: overrides ``application.name``
        SERVICEKERNEL_PROVIDERS: comma separated, overrides ``providers``
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the configuration.

        Args:
            config: Merged file configuration
        """
        self.config = config
        self._apply_environment_overrides()

    def _apply_environment_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        if "SERVICEKERNEL_LOG_LEVEL" in os.environ:
            log_config = self._section("logging")
            log_config["level"] = os.environ["SERVICEKERNEL_LOG_LEVEL"].upper()

        if "SERVICEKERNEL_APP_NAME" in os.environ:
            app_config = self._section("application")
            app_config["name"] = os.environ["SERVICEKERNEL_APP_NAME"]

        if "SERVICEKERNEL_PROVIDERS" in os.environ:
            self.config["providers"] = [
                path.strip()
                for path in os.environ["SERVICEKERNEL_PROVIDERS"].split(",")
                if path.strip()
            ]

    def _section(self, name: str) -> Dict[str, Any]:
        """Get a config section for writing, replacing a null or scalar value."""
        section = self.config.get(name)
        if not isinstance(section, dict):
            section = self.config[name] = {}
        return section

    def get_app_name(self) -> str:
        return (self.config.get("application") or {}).get("name", DEFAULT_APP_NAME)

    def get_log_level(self) -> str:
        """
        Get logging level.

        Returns:
            str: Logging level
        """
        return (self.config.get("logging") or {}).get("level", DEFAULT_LOG_LEVEL)

    def get_log_format(self) -> str:
        """
        Get logging format.

        Returns:
            str: ``json`` or ``text``
        """
        return (self.config.get("logging") or {}).get("format", DEFAULT_LOG_FORMAT)

    def get_providers(self) -> List[str]:
        return list(self.config.get("providers") or [])
