"""Configuration management — TOML config at ~/.config/subdash/subdash.toml."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import tomli_w

from subdash.core.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

_DEFAULT_CONFIG: dict[str, Any] = {
    "api": {
        "base_url": "http://localhost:5500/api/v1",
        "timeout_seconds": 30.0,
    },
    "display": {
        "date_format": "%b %d, %Y",
        "default_currency": "INR",
        "recent_limit": 6,
    },
    "logging": {
        "level": "WARNING",
        "format": "console",
    },
}


def get_config_dir() -> Path:
    """Return the config directory, creating it if needed."""
    config_dir = Path(os.environ.get("SUBDASH_CONFIG_DIR", "~/.config/subdash")).expanduser()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Return the path to the config TOML file."""
    return get_config_dir() / "subdash.toml"


def load_config(apply_env: bool = True) -> dict[str, Any]:
    """Load configuration from TOML file, returning defaults if not found.

    With apply_env, SUBDASH_API_URL (when set) wins over api.base_url.
    """
    config_path = get_config_path()
    config = _deep_copy_dict(_DEFAULT_CONFIG)
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                user_config = tomllib.load(f)
        except Exception as e:
            raise ConfigError(f"Failed to load config: {e}") from e
        config = _merge_config(config, user_config)

    env_url = os.environ.get("SUBDASH_API_URL")
    if apply_env and env_url:
        config["api"]["base_url"] = env_url
    return config


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to TOML file."""
    config_path = get_config_path()
    try:
        with open(config_path, "wb") as f:
            tomli_w.dump(config, f)
    except Exception as e:
        raise ConfigError(f"Failed to save config: {e}") from e


def update_config(**updates: Any) -> dict[str, Any]:
    """Load config, apply nested updates, save, and return the result.

    Usage: update_config(api={"base_url": "https://subs.example.com/api/v1"})
    """
    config = load_config(apply_env=False)
    for section, values in updates.items():
        if section not in config:
            config[section] = {}
        if isinstance(values, dict):
            config[section].update(values)
        else:
            config[section] = values
    save_config(config)
    return config


def set_value(dotted_key: str, raw_value: str) -> dict[str, Any]:
    """Set a single `section.key` from a string, coerced to the default's type."""
    section, _, key = dotted_key.partition(".")
    if not section or not key:
        raise ConfigError(f"Expected SECTION.KEY, got: {dotted_key}")

    default = _DEFAULT_CONFIG.get(section, {}).get(key)
    value: Any = raw_value
    try:
        if isinstance(default, bool):
            value = raw_value.lower() in ("1", "true", "yes", "on")
        elif isinstance(default, int):
            value = int(raw_value)
        elif isinstance(default, float):
            value = float(raw_value)
    except ValueError as e:
        raise ConfigError(f"Invalid value for {dotted_key}: {raw_value}") from e

    return update_config(**{section: {key: value}})


def _merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_config(base[key], value)
        else:
            base[key] = value
    return base


def _deep_copy_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Simple deep copy for nested dicts of simple types."""
    result: dict[str, Any] = {}
    for k, v in d.items():
        if isinstance(v, dict):
            result[k] = _deep_copy_dict(v)
        else:
            result[k] = v
    return result
