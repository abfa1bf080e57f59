"""
Configuration loading for fwcatalog.

Settings live in a YAML file under the platform config directory
(``platformdirs.user_config_dir("fwcatalog")``). Every key is optional; command
line flags override file values.
"""

import os
from typing import Any, Dict, Optional

import platformdirs
import yaml

from fwcatalog.constants import (
    APP_NAME,
    CATALOG_BASE_URL,
    CONFIG_FILE_NAME,
    CONFIG_KEY_BASE_URL,
    CONFIG_KEY_LOG_DIR,
    CONFIG_KEY_LOG_LEVEL,
    CONFIG_KEY_MAX_DEVICE_ID,
    CONFIG_KEY_REQUEST_DELAY,
    CONFIG_KEY_START_DEVICE_ID,
    CONFIG_KEY_STORE_PATH,
    DEFAULT_MAX_DEVICE_ID,
    DEFAULT_REQUEST_DELAY,
    DEFAULT_START_DEVICE_ID,
    DEFAULT_STORE_FILE,
)
from fwcatalog.exceptions import ConfigFileError, ConfigValidationError
from fwcatalog.log_utils import logger

DEFAULT_CONFIG: Dict[str, Any] = {
    CONFIG_KEY_BASE_URL: CATALOG_BASE_URL,
    CONFIG_KEY_START_DEVICE_ID: DEFAULT_START_DEVICE_ID,
    CONFIG_KEY_MAX_DEVICE_ID: DEFAULT_MAX_DEVICE_ID,
    CONFIG_KEY_STORE_PATH: DEFAULT_STORE_FILE,
    CONFIG_KEY_REQUEST_DELAY: DEFAULT_REQUEST_DELAY,
    CONFIG_KEY_LOG_LEVEL: None,
    CONFIG_KEY_LOG_DIR: None,
}


def get_config_file() -> str:
    """Return the default configuration file path for this platform."""
    return os.path.join(platformdirs.user_config_dir(APP_NAME), CONFIG_FILE_NAME)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML and merge it over the defaults.

    Parameters:
        config_path (Optional[str]): Explicit file to read. When omitted the platform
            config file is used if it exists; a missing default file yields the defaults.

    Returns:
        Dict[str, Any]: Validated configuration mapping.

    Raises:
        ConfigFileError: If an explicitly requested file is missing, or a file cannot be read or parsed.
        ConfigValidationError: If a value is out of range or of the wrong type.
    """
    explicit = config_path is not None
    path = config_path or get_config_file()
    config = dict(DEFAULT_CONFIG)

    if not os.path.exists(path):
        if explicit:
            raise ConfigFileError(f"Configuration file not found: {path}")
        logger.debug(f"No configuration file at {path}; using defaults")
        return validate_config(config)

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(
            f"Could not read configuration file {path}", details=str(e)
        ) from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigFileError(
            f"Configuration file {path} must contain a mapping",
            details=f"got {type(loaded).__name__}",
        )

    unknown = sorted(set(loaded) - set(DEFAULT_CONFIG))
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

    config.update({k: v for k, v in loaded.items() if k in DEFAULT_CONFIG})
    logger.debug(f"Loaded configuration from {path}")
    return validate_config(config)


def apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of `config` with every non-None override applied, validated again.
    """
    merged = dict(config)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return validate_config(merged)


def _non_negative_int(config: Dict[str, Any], key: str) -> int:
    value = config.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigValidationError(
            f"{key} must be an integer", field=key, value=value
        )
    if value < 0:
        raise ConfigValidationError(f"{key} must be >= 0", field=key, value=value)
    return value


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate configuration values and normalize the request delay to float.

    Raises:
        ConfigValidationError: On the first invalid value found.
    """
    start = _non_negative_int(config, CONFIG_KEY_START_DEVICE_ID)
    end = _non_negative_int(config, CONFIG_KEY_MAX_DEVICE_ID)
    if start > end:
        raise ConfigValidationError(
            f"{CONFIG_KEY_START_DEVICE_ID} must not exceed {CONFIG_KEY_MAX_DEVICE_ID}",
            field=CONFIG_KEY_START_DEVICE_ID,
            value=start,
        )

    delay = config.get(CONFIG_KEY_REQUEST_DELAY)
    try:
        delay = float(delay)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(
            f"{CONFIG_KEY_REQUEST_DELAY} must be a number",
            field=CONFIG_KEY_REQUEST_DELAY,
            value=delay,
        ) from e
    if delay < 0:
        raise ConfigValidationError(
            f"{CONFIG_KEY_REQUEST_DELAY} must be >= 0",
            field=CONFIG_KEY_REQUEST_DELAY,
            value=delay,
        )
    config[CONFIG_KEY_REQUEST_DELAY] = delay

    for key in (CONFIG_KEY_BASE_URL, CONFIG_KEY_STORE_PATH):
        value = config.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigValidationError(
                f"{key} must be a non-empty string", field=key, value=value
            )

    return config
