"""Application configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import AppConfig
from .utils import load_json

CONFIG_ENV_VAR = 'WPSTATS_CONFIG'
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'app_config.json'


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Load configuration from data/app_config.json.

    The file named by the WPSTATS_CONFIG environment variable takes
    precedence. A missing file yields the defaults. Configuration is cached
    after first load.

    Raises:
        ValueError: If the config file has an invalid structure

    Example:
        from wpstats.config import get_config
        config = get_config()
        print(f"Store: {config.data_path}")
    """
    return load_json(get_config_path(), schema=AppConfig, default={})


def get_config_path() -> Path:
    """Path of the config file in use (WPSTATS_CONFIG or the bundled default)."""
    return Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)


def get_data_path() -> Path:
    """
    Get the JSON store path from config.

    A relative data_path is resolved against the config file's directory,
    not the working directory.
    """
    path = Path(get_config().data_path)
    if not path.is_absolute():
        path = get_config_path().parent / path
    return path


def get_default_club_id() -> int:
    """Get the club used when none is given."""
    return get_config().default_club_id


def get_top_players_limit() -> int:
    """Get how many leaders to show per stat."""
    return get_config().top_players_limit


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file or WPSTATS_CONFIG changes at runtime.
    """
    get_config.cache_clear()
