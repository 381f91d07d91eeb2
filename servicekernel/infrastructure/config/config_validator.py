"""
Configuration validator for validating configuration values.

This module checks the kernel configuration and reports every problem
found in a single error.
"""

from typing import Dict, Any, List
import re

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "text"]

PROVIDER_PATH_PATTERN = re.compile(r"^[A-Za-z_][\w.]*:[A-Za-z_][\w.]*$")


class ConfigValidator:
    """
    Validator for configuration values.

    Errors are collected across all sections before raising.
    """

    def __init__(self):
        """Initialize the validator."""
        self.errors: List[str] = []

    def validate_config(self, config: Dict[str, Any]) -> None:
        """
        Validate configuration.

        Args:
            config: Configuration to validate

        Raises:
            ValueError: If configuration is invalid
        """
        self.errors = []

        if "application" in config:
            self._validate_application_config(config["application"])

        if "logging" in config:
            self._validate_logging_config(config["logging"])

        if "providers" in config:
            self._validate_providers(config["providers"])

        if self.errors:
            raise ValueError("\n".join(self.errors))

    def _validate_application_config(self, config: Any) -> None:
        if not isinstance(config, dict):
            self.errors.append("Application configuration must be a mapping")
            return

        if "name" in config:
            name = config["name"]
            if not isinstance(name, str) or not name:
                self.errors.append("Application name must be a non-empty string")

    def _validate_logging_config(self, config: Any) -> None:
        """
        Validate logging configuration.

        Args:
            config: Logging configuration
        """
        if not isinstance(config, dict):
            self.errors.append("Logging configuration must be a mapping")
            return

        if "level" in config:
            level = config["level"]
            if not isinstance(level, str) or level not in VALID_LOG_LEVELS:
                self.errors.append(
                    f"Logging level must be one of: {', '.join(VALID_LOG_LEVELS)}"
                )

        if "format" in config:
            fmt = config["format"]
            if not isinstance(fmt, str) or fmt not in VALID_LOG_FORMATS:
                self.errors.append(
                    f"Logging format must be one of: {', '.join(VALID_LOG_FORMATS)}"
                )

    def _validate_providers(self, providers: Any) -> None:
        """
        Validate provider import paths.

        Args:
            providers: List of ``module:attribute`` strings
        """
        if providers is None:
            return

        if not isinstance(providers, list):
            self.errors.append("Providers must be a list of 'module:attribute' strings")
            return

        for index, path in enumerate(providers):
            if not isinstance(path, str) or not PROVIDER_PATH_PATTERN.match(path):
                self.errors.append(
                    f"Provider #{index} must be a 'module:attribute' string, got {path!r}"
                )
