"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in src/core/config.py to avoid information
leakage between layers.
"""

import logging
import os
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from src.core.config import Config, validate_config


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


class ConfigError(Exception):
    """Raised when configuration is present but unusable."""


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} environment placeholder.

    Args:
        value: Value to resolve (may be a ${...} placeholder)

    Returns:
        Environment value, or the original value if unresolved
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def resolve_timezone(name: str) -> tzinfo:
    """Look up an IANA timezone by name.

    Raises:
        ConfigError: If the timezone is unknown
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown display_timezone '{name}'") from e


def _check(config: Config) -> Config:
    """Validate a config, logging warnings and raising on errors."""
    result = validate_config(config)

    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)

    if not result.valid:
        details = "; ".join(
            f"{e.field}: {e.message}" for e in result.critical_errors
        )
        raise ConfigError(f"Invalid configuration: {details}")

    resolve_timezone(config.display_timezone)
    return config


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    Only ${VAR} expansion touches the environment.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed and validated Config object

    Raises:
        ConfigError: If values have the wrong type or fail validation
    """
    data = {k: _resolve_value(v) for k, v in data.items()}
    defaults = Config()

    try:
        config = Config(
            feed_url=str(data.get("feed_url", defaults.feed_url)),
            request_timeout_seconds=float(
                data.get("request_timeout_seconds", defaults.request_timeout_seconds)
            ),
            tile_url=str(data.get("tile_url", defaults.tile_url)),
            attribution=str(data.get("attribution", defaults.attribution)),
            center_latitude=float(data.get("center_latitude", defaults.center_latitude)),
            center_longitude=float(data.get("center_longitude", defaults.center_longitude)),
            zoom=int(data.get("zoom", defaults.zoom)),
            display_timezone=str(data.get("display_timezone", defaults.display_timezone)),
            time_format=str(data.get("time_format", defaults.time_format)),
            snapshot_width=int(data.get("snapshot_width", defaults.snapshot_width)),
            snapshot_height=int(data.get("snapshot_height", defaults.snapshot_height)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e

    return _check(config)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        ConfigError: If the file content is not a mapping or fails validation
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: feed %s, timezone %s",
        config.feed_url,
        config.display_timezone,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        FEED_URL: GeoJSON feed URL
        REQUEST_TIMEOUT: Feed request timeout in seconds
        DISPLAY_TIMEZONE: IANA timezone for popup timestamps
        TILE_URL: Slippy-map tile URL template

    Returns:
        Config object from environment
    """
    data: dict[str, Any] = {}

    env_fields = {
        "FEED_URL": "feed_url",
        "REQUEST_TIMEOUT": "request_timeout_seconds",
        "DISPLAY_TIMEZONE": "display_timezone",
        "TILE_URL": "tile_url",
    }
    for env_name, field_name in env_fields.items():
        value = os.environ.get(env_name)
        if value:
            data[field_name] = value

    return load_config_from_dict(data)


def get_config() -> Config:
    """Load configuration from file or environment.

    CONFIG_PATH wins when set; otherwise environment overrides are applied
    if any are present, falling back to the default config path.
    """
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif any(os.environ.get(k) for k in ("FEED_URL", "REQUEST_TIMEOUT", "DISPLAY_TIMEZONE", "TILE_URL")):
        return load_config_from_env()
    else:
        return load_config()
