"""Configuration file handling for epicat."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from epicat.constants import CONFIG_FILENAME, DEFAULT_DB_FILENAME

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "db_file": DEFAULT_DB_FILENAME,
    "accept_leading_zeros": False,
    "clear_screen": True,
}


def get_config_path(epicat_dir: str | Path) -> Path:
    """Get the path to the config file.

    Args:
        epicat_dir: Path to .epicat directory

    Returns:
        Path to config.toml
    """
    return Path(epicat_dir) / CONFIG_FILENAME


def load_config(epicat_dir: str | Path) -> dict[str, Any]:
    """Load configuration from .epicat/config.toml.

    Args:
        epicat_dir: Path to .epicat directory

    Returns:
        Configuration dictionary, or empty dict if no readable config exists
    """
    config_path = get_config_path(epicat_dir)
    if not config_path.exists():
        return {}

    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return {}


def save_config(epicat_dir: str | Path, config: dict[str, Any]) -> None:
    """Save configuration to .epicat/config.toml.

    Args:
        epicat_dir: Path to .epicat directory
        config: Configuration dictionary to save
    """
    config_path = get_config_path(epicat_dir)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with config_path.open("wb") as f:
        tomli_w.dump(config, f)


def get_setting(epicat_dir: str | Path, key: str) -> Any:
    """Look up *key* in the config, falling back to the built-in default.

    A value whose type differs from the default's is ignored.
    """
    default = DEFAULT_CONFIG[key]
    value = load_config(epicat_dir).get(key, default)
    if not isinstance(value, type(default)):
        logger.warning(
            "Config key %s should be %s, got %r; using default",
            key,
            type(default).__name__,
            value,
        )
        return default
    return value


def get_db_path(epicat_dir: str | Path) -> Path:
    """Return the database file path configured for *epicat_dir*."""
    return Path(epicat_dir) / get_setting(epicat_dir, "db_file")
