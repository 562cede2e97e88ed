"""
Configuration Manager module for the system stats sampler.
"""
import copy
import json
import os
from typing import Any, Optional, Dict

from ..utils import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "config_version": 1,
    "sampler": {
        "cpu_interval_sec": 0.1,
    },
    "poller": {
        "interval_sec": 2.0,
    },
    "logging": {
        "console_level": "INFO",
        "file_level": "DEBUG",
        "file_path": None,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    Loads sampler configuration from a JSON file layered over built-in defaults.
    """
    CURRENT_CONFIG_VERSION = 1

    def __init__(self, config_path: Optional[str] = None):
        """
        Initializes the ConfigManager, loading the configuration file if one is given.

        :param config_path: The path to the configuration JSON file; None uses defaults only
        :type config_path: Optional[str]
        :raises: FileNotFoundError if the configuration file path is provided but does not exist
        :raises: ValueError if the configuration file is invalid JSON or holds invalid values
        """
        self._config_path = config_path
        self._config_data: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        if self._config_path is None:
            logger.debug("ConfigManager initialized without a config path; using defaults.")
        else:
            self._config_data = _merge(DEFAULT_CONFIG, self._load_config())
            self._check_version()
            logger.info(f"Configuration loaded successfully from: {self._config_path}")
        self._validate_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Loads the configuration data from the JSON file.

        :raises: FileNotFoundError if the file doesn't exist
        :raises: ValueError if there are JSON parsing errors
        """
        if not os.path.exists(self._config_path):
            logger.critical(f"Configuration file not found: {self._config_path}")
            raise FileNotFoundError(f"Configuration file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.critical(f"Error decoding JSON from config file {self._config_path}: {e}")
            raise ValueError(f"Invalid JSON in configuration file: {e}") from e
        except OSError as e:
            logger.critical(f"Error reading config file {self._config_path}: {e}")
            raise ValueError(f"Could not read configuration file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError("Configuration file content is not a valid JSON object.")
        return data

    def _check_version(self):
        version = self.get('config_version')
        if not isinstance(version, int) or version <= 0:
            logger.warning(f"Invalid 'config_version' ({version}); treating configuration as v{self.CURRENT_CONFIG_VERSION}.")
            self._config_data['config_version'] = self.CURRENT_CONFIG_VERSION
        elif version > self.CURRENT_CONFIG_VERSION:
            logger.warning(f"Configuration file version (v{version}) is newer than the supported version (v{self.CURRENT_CONFIG_VERSION}). Unknown keys are ignored.")

    def _validate_config(self):
        """
        Validates the interval settings.

        :raises: ValueError if an interval is not a positive number
        """
        for key_path in ('sampler.cpu_interval_sec', 'poller.interval_sec'):
            value = self.get(key_path)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                msg = f"Invalid '{key_path}' configuration: Must be a positive number, got {value!r}."
                logger.critical(msg)
                raise ValueError(msg)

        logger.debug("Configuration validation passed.")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value using a dot-separated key path.

        :param key_path: The dot-separated path to the configuration key
        :type key_path: str
        :param default: The default value to return if the key is not found
        :type default: Any
        :return: The configuration value or the default value
        :rtype: Any
        """
        value: Any = self._config_data
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                logger.debug(f"Key path '{key_path}' leads to non-dictionary element at '{key}'.")
                return default
            if key not in value:
                logger.debug(f"Configuration key not found: '{key_path}'. Returning default: {default}")
                return default
            value = value[key]
        return value

    @property
    def all_config(self) -> Dict[str, Any]:
        """
        Returns a copy of the entire configuration dictionary.

        :return: Copy of configuration dictionary
        :rtype: Dict[str, Any]
        """
        return copy.deepcopy(self._config_data)
