"""
Config Module - Black Box Interface

Purpose: Run configuration management
Interface: get_config(), reset_config(), ConfigModule.get()/get_all()
Hidden: Config sources, validation logic, environment parsing

Can be replaced with different config systems (config files, Vault, etc).
"""

import os
import re
from typing import Any, Dict, Optional


# Configuration Contract: Required and Optional Keys
# This defines the black box interface - what the config module guarantees to provide

REQUIRED_CONFIG_KEYS = {
    "kubeconfig_dir": "Directory walked for cluster kubeconfig files",
    "config_suffix": "File name suffix identifying a kubeconfig file",
    "namespace": "Namespace holding the Prometheus pods",
    "container": "Container the df/du commands run in",
    "pod_pattern": "Regex pod names must match to be probed",
    "command_timeout": "kubectl command timeout in seconds",
    "max_workers": "Maximum probes in flight at once",
    "log_level": "Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    "webhook_timeout": "Webhook POST timeout in seconds",
}

OPTIONAL_CONFIG_KEYS = {
    "webhook_url": {
        "description": "Chat webhook receiving the report (delivery skipped if unset)",
        "default": None,
    },
    "special_kubeconfigs": {
        "description": "Extra kubeconfig paths that use the mount-first df command",
        "default": [],
    },
}

DEFAULT_POD_PATTERN = r"^(prometheus-k8s|prometheus-istio)"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _int_env(name: str, default: str) -> int:
    """Parse an integer environment variable."""
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


class ConfigModule:
    """Configuration management module."""

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        """Initialize with environment variables, then apply overrides."""
        self._config = self._load_from_env()
        for key, value in (overrides or {}).items():
            if value is not None:
                self._config[key] = value
        self._validate_required_keys()

    def _validate_required_keys(self) -> None:
        """
        Validate that all required configuration keys are present.

        Raises:
            ValueError: If required keys are missing or out of range
        """
        missing_keys = []
        for key in REQUIRED_CONFIG_KEYS:
            if key not in self._config or self._config[key] in (None, ""):
                missing_keys.append(key)

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}. "
                f"Check environment variables and command line options."
            )

        for key in ("command_timeout", "max_workers", "webhook_timeout"):
            if int(self._config[key]) < 1:
                raise ValueError(f"{key} must be at least 1, got {self._config[key]}")

        try:
            re.compile(self._config["pod_pattern"])
        except re.error as e:
            raise ValueError(f"pod_pattern is not a valid regex: {e}")

        level = str(self._config["log_level"]).upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self._config['log_level']!r}"
            )
        self._config["log_level"] = level

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment."""
        special = os.getenv("SPECIAL_KUBECONFIGS", "")

        return {
            # Discovery settings
            "kubeconfig_dir": os.getenv("KUBECONFIG_DIR", "/root/.kube/sys"),
            "config_suffix": os.getenv("KUBECONFIG_SUFFIX", ".yaml"),
            "namespace": os.getenv("TARGET_NAMESPACE", "monitoring"),
            "container": os.getenv("TARGET_CONTAINER", "prometheus"),
            "pod_pattern": os.getenv("POD_PATTERN", DEFAULT_POD_PATTERN),
            "special_kubeconfigs": [p.strip() for p in special.split(",") if p.strip()],
            # Execution settings
            "command_timeout": _int_env("COMMAND_TIMEOUT", "60"),
            "max_workers": _int_env("MAX_WORKERS", "32"),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            # Delivery settings
            "webhook_url": os.getenv("WEBHOOK_URL") or None,
            "webhook_timeout": _int_env("WEBHOOK_TIMEOUT", "10"),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values."""
        return self._config.copy()

    @staticmethod
    def get_config_schema() -> Dict[str, Any]:
        """
        Get the configuration schema (contract) for this module.

        Returns:
            Dictionary with 'required' and 'optional' key specifications

        Example:
            >>> schema = ConfigModule.get_config_schema()
            >>> print(schema['required']['namespace'])
            'Namespace holding the Prometheus pods'
        """
        return {
            "required": REQUIRED_CONFIG_KEYS.copy(),
            "optional": OPTIONAL_CONFIG_KEYS.copy(),
        }


# Singleton instance
_instance = None


def get_config(overrides: Optional[Dict[str, Any]] = None) -> ConfigModule:
    """Get the configuration module singleton.

    Overrides are only honoured on the call that creates the instance.
    """
    global _instance
    if _instance is None:
        _instance = ConfigModule(overrides)
    return _instance


def reset_config() -> None:
    """Drop the singleton so the next get_config() re-reads the environment."""
    global _instance
    _instance = None


__all__ = ["get_config", "reset_config", "ConfigModule", "DEFAULT_POD_PATTERN", "LOG_LEVELS"]
