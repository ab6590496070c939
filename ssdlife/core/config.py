"""Configuration loading with layered overrides."""

from pathlib import Path
from typing import Any

import yaml


DEFAULTS: dict[str, Any] = {
    "warning": 80,
    "critical": 90,
    "timeout": 30,
    "vendor_tool": None,
    "log_dir": None,
    "models": [],
}

PROJECT_CONFIG = ".ssdlife.yaml"


class ConfigError(Exception):
    """Config file named on the command line cannot be used."""

    pass


def user_config_path() -> Path:
    """Location of the per-user config file."""
    return Path.home() / ".config" / "ssdlife" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def read_config_file(path: Path) -> dict[str, Any]:
    """
    Load a config file that must exist and hold a mapping.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file {path} not found")
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Config file {path} cannot be read: {e}") from e
    except yaml.YAMLError as e:
        detail = " ".join(str(e).split())
        raise ConfigError(f"Config file {path} is not valid YAML: {detail}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must hold a mapping of settings")
    return data


def config_layers(explicit: Path | None = None) -> list[Path]:
    """Config files in precedence order, highest first."""
    layers = []
    if explicit is not None:
        layers.append(Path(explicit))
    layers.append(Path(PROJECT_CONFIG))
    layers.append(user_config_path())
    return layers


def get_config_value(key: str, explicit: Path | None = None) -> Any:
    """Get config value with explicit -> project -> user -> None precedence."""
    for path in config_layers(explicit):
        data = load_config_file(path)
        if key in data:
            return data[key]
    return None


def load_config(explicit: Path | None = None) -> dict[str, Any]:
    """
    Build the effective configuration.

    Every known key is resolved independently through the layers, so a
    user file can set thresholds while a project file only adds models.
    Missing or broken project and user files are skipped; a file named
    on the command line must load.

    Args:
        explicit: Config file given on the command line

    Returns:
        Dict holding every key from DEFAULTS

    Raises:
        ConfigError: If the explicit file is missing or unusable
    """
    if explicit is not None:
        read_config_file(explicit)

    config = dict(DEFAULTS)
    for key in DEFAULTS:
        value = get_config_value(key, explicit)
        if value is not None:
            config[key] = value
    return config
