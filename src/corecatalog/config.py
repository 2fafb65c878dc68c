"""
Configuration loading for corecatalog.

Settings live in an optional YAML file. Missing files and missing keys fall
back to defaults so a bare checkout with only a GITHUB_TOKEN in the
environment works.
"""

import os
from typing import Any, Dict, Optional

import platformdirs
import yaml

from corecatalog.constants import (
    CONFIG_APP_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_ALLOW_ENV_TOKEN,
    DEFAULT_CATALOG_FILE,
)
from corecatalog.exceptions import ConfigFileError
from corecatalog.log_utils import logger
from corecatalog.utils import get_effective_github_token

DEFAULT_CONFIG: Dict[str, Any] = {
    "GITHUB_TOKEN": None,
    "ALLOW_ENV_TOKEN": DEFAULT_ALLOW_ENV_TOKEN,
    "CATALOG_FILE": DEFAULT_CATALOG_FILE,
    "WORK_DIR": "",
}


def get_config_dir() -> str:
    """Return the platform-specific directory holding the configuration file."""
    return platformdirs.user_config_dir(CONFIG_APP_NAME)


def get_config_file(directory: Optional[str] = None) -> str:
    return os.path.join(directory or get_config_dir(), CONFIG_FILE_NAME)


def load_config(directory: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the corecatalog configuration YAML merged over the defaults.

    Parameters:
        directory (str | None): Directory containing CONFIG_FILE_NAME. When None the
            platformdirs user config directory is used.

    Returns:
        Dict[str, Any]: The effective configuration. A missing file yields the defaults.

    Raises:
        ConfigFileError: If the file exists but cannot be read, is not valid YAML,
            or does not contain a mapping.
    """
    config = dict(DEFAULT_CONFIG)
    config_path = get_config_file(directory)
    if not os.path.exists(config_path):
        logger.debug(f"No configuration file at {config_path}; using defaults")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(
            "Could not load configuration file", path=config_path, details=str(e)
        ) from e

    if loaded is None:
        return config
    if not isinstance(loaded, dict):
        raise ConfigFileError(
            "Configuration file must contain a mapping",
            path=config_path,
            details=f"got {type(loaded).__name__}",
        )

    config.update(loaded)
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def get_github_token(config: Dict[str, Any]) -> Optional[str]:
    """
    Resolve the ambient GitHub API credential for a configuration.

    Returns:
        Optional[str]: The configured token, else the GITHUB_TOKEN environment
            variable when ALLOW_ENV_TOKEN is enabled, else None.
    """
    return get_effective_github_token(
        config.get("GITHUB_TOKEN"),
        allow_env_token=config.get("ALLOW_ENV_TOKEN", DEFAULT_ALLOW_ENV_TOKEN),
    )
