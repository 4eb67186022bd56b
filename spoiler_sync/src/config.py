"""
Configuration management for the spoiler sync pipelines.

Settings come from config.json (merged over DEFAULT_CONFIG), then from
environment variables for board credentials, then from CLI overrides.
"""

import json
import os
import logging
from dataclasses import dataclass, field, fields
from typing import Dict, Any, List, Optional

from .errors import ConfigError


# Project root directory
APP_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_FILE = os.path.join(APP_DIR, "config.json")

# Environment variable -> config key
ENV_OVERRIDES = {
    "TRELLO_API_KEY": "trello_api_key",
    "TRELLO_USER_TOKEN": "trello_token",
    "BOARD_ID": "board_id",
}


# Default configuration
DEFAULT_CONFIG = {
    "_TRELLO_SETTINGS": "# Trello board and credentials (or set TRELLO_API_KEY, TRELLO_USER_TOKEN, BOARD_ID)",
    "board_id": "",
    "trello_api_key": "",
    "trello_token": "",

    "_SOURCE_SETTINGS": "# Spoiler feed and review pages",
    "spoiler_url": "http://www.magicspoiler.com/shadows-over-innistrad/",
    "review_urls": [
        "http://www.channelfireball.com/articles/shadows-over-innistrad-limited-set-review-white/",
        "http://www.channelfireball.com/articles/shadows-over-innistrad-limited-set-review-blue-cards/",
    ],

    "_PROCESSING_SETTINGS": "# Processing Options",
    "dry_run": True,  # log intended writes only
    "detail_concurrency": 50,
    "apply_concurrency": 1,
    "new_card_limit": None,  # null = no cap
    "review_limit": None,  # null = no cap
    "apply_delay_seconds": 0,
    "timeout": 30,
    "log_file": "",
}


@dataclass
class SyncConfig:
    """Explicit settings for one pipeline run."""
    board_id: str = ""
    trello_api_key: str = ""
    trello_token: str = ""
    spoiler_url: str = DEFAULT_CONFIG["spoiler_url"]
    review_urls: List[str] = field(default_factory=lambda: list(DEFAULT_CONFIG["review_urls"]))
    dry_run: bool = True
    detail_concurrency: Optional[int] = 50
    apply_concurrency: Optional[int] = 1
    new_card_limit: Optional[int] = None
    review_limit: Optional[int] = None
    apply_delay_seconds: float = 0
    timeout: float = 30
    log_file: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SyncConfig":
        """
        Build a config from a settings dictionary.

        Comment keys (leading underscore) and unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        cfg = cls(**{k: v for k, v in data.items() if k in known})
        cfg.validate()
        return cfg

    def validate(self) -> None:
        """
        Convert numeric settings and check their ranges.

        Values from config.json may arrive as strings ("2"); they are stored
        converted so later stages always see numbers.

        Raises:
            ConfigError: If a setting is not a number or is out of range
        """
        for name, minimum in (
            ("detail_concurrency", 1),
            ("apply_concurrency", 1),
            ("new_card_limit", 0),
            ("review_limit", 0),
        ):
            value = self._convert(name, int)
            if value is not None and value < minimum:
                raise ConfigError(f"{name} must be at least {minimum} (got {value})")
        for name in ("apply_delay_seconds", "timeout"):
            if self._convert(name, float) is None:
                raise ConfigError(f"{name} must be a number")
        if isinstance(self.review_urls, str):
            self.review_urls = [self.review_urls]
        else:
            self.review_urls = list(self.review_urls)

    def _convert(self, name: str, kind):
        value = getattr(self, name)
        if value is None:
            return None
        if isinstance(value, bool):
            raise ConfigError(f"{name} must be a number (got {value!r})")
        try:
            converted = kind(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name} must be a number (got {value!r})") from e
        setattr(self, name, converted)
        return converted

    def require_board(self) -> None:
        """
        Ensure board credentials are present.

        Raises:
            ConfigError: Listing every missing setting
        """
        missing = [
            name for name in ("board_id", "trello_api_key", "trello_token")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigError(
                "Trello settings not configured: " + ", ".join(missing)
            )


def apply_env_overrides(config: Dict[str, Any], environ=None) -> Dict[str, Any]:
    """
    Overlay credentials from environment variables.

    Args:
        config: Configuration dictionary
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New dictionary with non-empty environment values applied
    """
    environ = os.environ if environ is None else environ
    merged = dict(config)
    for env_name, key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            merged[key] = value
    return merged


def load_config(config_file: str = CONFIG_FILE) -> Dict[str, Any]:
    """
    Load configuration from file or create with defaults.

    Args:
        config_file: Path to config.json

    Returns:
        Configuration dictionary
    """
    if not os.path.exists(config_file):
        logging.info(f"Config file not found, creating default: {config_file}")
        save_config(DEFAULT_CONFIG, config_file)
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load config {config_file}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config file must contain a JSON object: {config_file}")

    # Merge with defaults (add any new keys from DEFAULT_CONFIG)
    merged = DEFAULT_CONFIG.copy()
    merged.update(config)
    return merged


def save_config(config: Dict[str, Any], config_file: str = CONFIG_FILE):
    """
    Save configuration to file.

    Args:
        config: Configuration dictionary
        config_file: Path to config.json
    """
    try:
        config_dir = os.path.dirname(config_file)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=4, ensure_ascii=False)

    except OSError as e:
        logging.error(f"Failed to save config: {e}")
