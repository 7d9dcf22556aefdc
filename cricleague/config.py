"""League configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig
from .utils import load_json

PROJECT_ROOT = Path(__file__).parent.parent


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load.

    Returns:
        LeagueConfig object with validated settings

    Raises:
        FileNotFoundError: If league_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from cricleague.config import get_config
        config = get_config()
        print(f"Minimum player age: {config.min_player_age}")
    """
    config_path = PROJECT_ROOT / 'data' / 'league_config.json'
    return load_json(config_path, schema=LeagueConfig)


def get_league_name() -> str:
    """Get the league display name from config."""
    return get_config().league_name


def get_current_season() -> int:
    """Get the current season from config."""
    return get_config().current_season


def get_min_player_age() -> int:
    """Get the minimum age for registering a player."""
    return get_config().min_player_age


def get_max_player_age() -> int | None:
    """Get the maximum player age, or None when there is no upper bound."""
    return get_config().max_player_age


def get_zones() -> list[str]:
    """Get the list of league zones."""
    return get_config().zones


def get_data_dir() -> Path:
    """Get the document store directory, resolved against the project root."""
    data_dir = Path(get_config().data_dir)
    if not data_dir.is_absolute():
        data_dir = PROJECT_ROOT / data_dir
    return data_dir


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
