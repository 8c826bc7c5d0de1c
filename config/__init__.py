"""
Configuration Module for the Shipping Label Extraction Engine.

This module provides centralized configuration management using YAML files.
OCR regions, thresholds and worker limits are read from settings.yaml so
they can be tuned without touching resolver code.
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional


# Environment variable that points at an alternative settings file
CONFIG_ENV_VAR = "LABEL_EXTRACTION_CONFIG"


class ConfigurationManager:
    """
    Centralized configuration management for the label extraction engine.

    Loads settings.yaml once per process and exposes values through
    dot-notation lookups.

    Attributes:
        config_path (Path): Path to the configuration file.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("ocr.line_tolerance")
        5
        >>> config.get("extraction.max_workers")
        3
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.config_path = cls._locate(config_path)
            instance._config = cls._read(instance.config_path)
            cls._instance = instance
        return cls._instance

    @staticmethod
    def _locate(config_path: Optional[str]) -> Path:
        """Explicit path, then $LABEL_EXTRACTION_CONFIG, then config/settings.yaml."""
        config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
        if config_path:
            return Path(config_path)
        return Path(__file__).parent / "settings.yaml"

    @staticmethod
    def _read(config_path: Path) -> Dict[str, Any]:
        """
        Parse the settings file and anchor relative log paths at the project root.

        Raises:
            FileNotFoundError: If the settings file is missing.
            yaml.YAMLError: If it is not valid YAML.
        """
        if not config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            settings = yaml.safe_load(f) or {}

        log_file = settings.get('logging', {}).get('file', {})
        if log_file.get('path') and not Path(log_file['path']).is_absolute():
            log_file['path'] = str(Path(__file__).parent.parent / log_file['path'])
        return settings

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as "ocr.tesseract.psm".

        Returns:
            The value, or ``default`` when any segment is missing.
        """
        node: Any = self._config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance (used by tests and the CLI --config flag)."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Read one setting from the shared ConfigurationManager."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'CONFIG_ENV_VAR']
