"""
Configuration loading for sievedir.

Config is an optional YAML mapping:

    sieve_dir: ~/mail/sieve
    log_level: INFO

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = "~/.sievedir/config.yaml"
DEFAULT_SIEVE_DIR = "~/.sievedir/scripts"


class ConfigError(Exception):
    """Raised when the config file cannot be parsed."""

    pass


def get_config_path(config_path: Optional[str] = None) -> Path:
    """Get the config file path.

    Order:
    1. Explicit path argument
    2. $SIEVEDIR_CONFIG (if set)
    3. ~/.sievedir/config.yaml
    """
    if config_path:
        return Path(config_path).expanduser()
    env_path = os.environ.get("SIEVEDIR_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_PATH).expanduser()


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML.

    Args:
        config_path: Explicit config file (must exist if given).

    Returns:
        Config dict, or {} when the default file does not exist.

    Raises:
        FileNotFoundError: If an explicitly requested file is missing.
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    explicit = bool(config_path or os.environ.get("SIEVEDIR_CONFIG"))
    path = get_config_path(config_path)

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a YAML mapping")
    return data


def resolve_sieve_dir(config: Dict[str, Any], override: Optional[str] = None) -> Path:
    """Pick the sieve directory.

    Order:
    1. Explicit override (--dir)
    2. $SIEVEDIR_DIR (if set)
    3. `sieve_dir` from config
    4. ~/.sievedir/scripts
    """
    if override:
        return Path(override).expanduser()
    env_dir = os.environ.get("SIEVEDIR_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    if config.get("sieve_dir"):
        return Path(str(config["sieve_dir"])).expanduser()
    return Path(DEFAULT_SIEVE_DIR).expanduser()
