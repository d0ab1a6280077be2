"""
User configuration persistence.

Stores settings like preferred leader and batch size in a JSON file.
"""

import json
from pathlib import Path
from typing import Any, TypedDict


class Config(TypedDict, total=False):
    """User configuration."""
    leader: str  # Default leader id for play / bots
    runs_per_batch: int  # Bot runs per leader/strategy pair
    typewriter: bool  # Reveal segment logs line by line
    catalog_path: str | None  # YAML catalog to use instead of the defaults


DEFAULT_CONFIG: Config = {
    "leader": "balanced",
    "runs_per_batch": 100,
    "typewriter": True,
    "catalog_path": None,
}


def get_config_path(config_dir: Path | str = ".") -> Path:
    """Get path to config file."""
    return Path(config_dir) / ".fellowship_config.json"


def load_config(config_dir: Path | str = ".") -> Config:
    """Load config from file, or return defaults if not found."""
    path = get_config_path(config_dir)

    if not path.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
        if not isinstance(saved, dict):
            return DEFAULT_CONFIG.copy()
        # Merge with defaults to handle missing keys
        config = DEFAULT_CONFIG.copy()
        config.update(saved)
        return config
    except (json.JSONDecodeError, OSError):
        return DEFAULT_CONFIG.copy()


def save_config(config: Config, config_dir: Path | str = ".") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(config_dir)

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError:
        return False


def set_value(key: str, value: Any, config_dir: Path | str = ".") -> bool:
    """Save a single setting. Unknown keys raise KeyError."""
    if key not in DEFAULT_CONFIG:
        raise KeyError(f"Unknown config key: {key}")
    config = load_config(config_dir)
    config[key] = value
    return save_config(config, config_dir)
