"""
Configuration management for voicetask.
Values come from DEFAULTS, then an optional JSON file, then VOICETASK_* env vars.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ENV_PREFIX = "VOICETASK_"
DEFAULT_CONFIG_PATH = Path.home() / ".voicetask" / "config.json"

# Default configuration
DEFAULTS = {
    "default_category": "Tasks",
    "log_level": "INFO",

    # Remote enrichment collaborator
    "enrichment_enabled": False,
    "enrichment_url": "http://localhost:3000",
    "enrichment_timeout": 10.0,
    "enrichment_token": "",
}


def _config_path() -> Path:
    override = os.environ.get(ENV_PREFIX + "CONFIG")
    return Path(override) if override else DEFAULT_CONFIG_PATH


def _load_file() -> dict[str, Any]:
    """Load the JSON config file. Missing or broken files count as empty."""
    path = _config_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a JSON object")
        return {}
    return data


def _coerce(raw: str, default: Any) -> Any:
    """Convert an env string to the type of its default value."""
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            return default
    if isinstance(default, float):
        try:
            return float(raw)
        except ValueError:
            return default
    return raw


class Config:
    """Configuration manager merging defaults, file and environment."""

    _cache: dict[str, Any] = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a config value. Returns default if not set anywhere."""
        if key in cls._cache:
            return cls._cache[key]

        value = DEFAULTS.get(key, default)
        file_values = _load_file()
        if key in file_values:
            value = file_values[key]

        env_value = os.environ.get(ENV_PREFIX + key.upper())
        if env_value is not None:
            value = _coerce(env_value, DEFAULTS.get(key, default))

        cls._cache[key] = value
        return value

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set a config value for the lifetime of the process."""
        cls._cache[key] = value

    @classmethod
    def get_all(cls) -> dict[str, Any]:
        """Get all config values, merged with defaults."""
        keys = set(DEFAULTS) | set(_load_file()) | set(cls._cache)
        return {key: cls.get(key) for key in sorted(keys)}

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the config cache."""
        cls._cache.clear()

    # Convenience accessors for common config values
    @classmethod
    def default_category(cls) -> str:
        return cls.get("default_category", "Tasks")

    @classmethod
    def enrichment_enabled(cls) -> bool:
        return bool(cls.get("enrichment_enabled", False))

    @classmethod
    def enrichment_url(cls) -> str:
        return cls.get("enrichment_url", "http://localhost:3000")

    @classmethod
    def enrichment_timeout(cls) -> float:
        return float(cls.get("enrichment_timeout", 10.0))

    @classmethod
    def enrichment_token(cls) -> str:
        return cls.get("enrichment_token", "")
