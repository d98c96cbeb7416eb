"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS feed client (HTTP)
- Static map client (tile fetching, PNG rendering)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.feed_client import FeedClient, FetchError
from src.shell.static_map_client import StaticMapClient
from src.shell.config_loader import load_config, ConfigError

__all__ = [
    "FeedClient",
    "FetchError",
    "StaticMapClient",
    "load_config",
    "ConfigError",
]
