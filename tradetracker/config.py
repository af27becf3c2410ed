"""Configuration for Trading Tracker.

Settings live in ``~/.config/tradetracker/config.toml``. Set
``TRADETRACKER_HOME`` to use another directory.
"""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_USER = "local"
DEFAULT_LOG_LEVEL = "WARNING"


def get_config_dir() -> Path:
    """Get the configuration directory."""
    override = os.environ.get("TRADETRACKER_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "tradetracker"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def get_config() -> Optional[dict]:
    """Lazily load configuration.

    Returns:
        Config dict, or None if the file is missing or unreadable.
    """
    import toml

    config_path = get_config_path()

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return None


def get_db_path(config: Optional[dict] = None) -> Path:
    """Get the database path."""
    configured = (config or {}).get("journal", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "tradetracker.db"


def get_user_id(config: Optional[dict] = None) -> str:
    """Get the journal owner's ID."""
    return str((config or {}).get("journal", {}).get("user", DEFAULT_USER))


def get_default_days(config: Optional[dict] = None):
    """Get the default trend window, unparsed."""
    from tradetracker.trends.window import DEFAULT_DAYS

    return (config or {}).get("trends", {}).get("default_days", DEFAULT_DAYS)


def get_log_level(config: Optional[dict] = None) -> str:
    """Get the configured log level name."""
    return str((config or {}).get("logging", {}).get("level", DEFAULT_LOG_LEVEL)).upper()


def create_template_config() -> Path:
    """Write a template configuration file and return its path."""
    import toml

    config_dir = get_config_dir()
    config_path = config_dir / "config.toml"

    config_dir.mkdir(parents=True, exist_ok=True)

    template = {
        "journal": {
            "user": DEFAULT_USER,
            "db_path": str(config_dir / "tradetracker.db"),
        },
        "trends": {
            "default_days": 30,
        },
        "logging": {
            "level": DEFAULT_LOG_LEVEL,
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path
