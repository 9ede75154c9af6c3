"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of BrioConfig to/from
TOML format.
"""

import os
import platform
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from brio.domain.config import BrioConfig

LOCAL_CONFIG_NAME = ".brio.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/brio/config.toml or ~/.config/brio/config.toml
    - Windows: %APPDATA%/brio/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "brio" / "config.toml"
        return Path.home() / ".config" / "brio" / "config.toml"
    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        return Path(xdg_config) / "brio" / "config.toml"
    return Path.home() / ".config" / "brio" / "config.toml"


def get_local_config_path(root: Path) -> Path:
    """Get the path of the project config file inside a scan root."""
    return root / LOCAL_CONFIG_NAME


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to a TOML config file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def load_config(path: Path) -> BrioConfig:
    """Load configuration from a single TOML file over built-in defaults.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed or has invalid values
    """
    return BrioConfig.from_partial(BrioConfig.default(), load_config_data(path))


def config_to_toml(config: BrioConfig) -> str:
    """Serialize a config to TOML text."""
    return tomli_w.dumps(config.to_dict())


def save_config(config: BrioConfig, path: Path) -> None:
    """Save configuration to a TOML file, creating parent directories.

    Args:
        config: Configuration to write
        path: Destination path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(config.to_dict(), f)
