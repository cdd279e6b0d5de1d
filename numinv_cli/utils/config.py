"""Configuration management for the CLI.

Settings live in ``config.json`` under the user config directory; the API
key and password are kept in the OS keyring, never in the file.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

import keyring
from keyring.errors import KeyringError
from platformdirs import user_config_dir

logger = logging.getLogger("numinv.cli")

APP_NAME = "numinv"
KEYRING_SERVICE = "numinv"
ENV_CONFIG_DIR = "NUMINV_CONFIG_DIR"

DEFAULT_BASE_URL = "https://localhost"


@dataclass
class Config:
    """CLI configuration."""

    base_url: str = DEFAULT_BASE_URL
    username: Optional[str] = None
    default_output: str = "json"
    match_conflict_message: bool = False

    # Secrets, read from and written to the keyring
    api_key: Optional[str] = None
    password: Optional[str] = None


SECRET_FIELDS = ("api_key", "password")


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_dir = Path(os.environ.get(ENV_CONFIG_DIR) or user_config_dir(APP_NAME))
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / "config.json"


def _get_secret(name: str) -> Optional[str]:
    try:
        return keyring.get_password(KEYRING_SERVICE, name)
    except KeyringError as e:
        logger.debug(f"Keyring unavailable, {name} not loaded: {e}")
        return None


def _set_secret(name: str, value: Optional[str]) -> None:
    if value:
        keyring.set_password(KEYRING_SERVICE, name, value)
        return
    try:
        keyring.delete_password(KEYRING_SERVICE, name)
    except KeyringError:
        pass


def load_config() -> Config:
    """Load configuration from file and keyring."""
    config_path = get_config_path()
    config = Config()

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
            data = {}
        known = {f.name for f in fields(Config)} - set(SECRET_FIELDS)
        config = Config(**{k: v for k, v in data.items() if k in known})

    config.api_key = _get_secret("api_key")
    config.password = _get_secret("password")
    return config


def save_config(config: Config) -> None:
    """Save configuration to file and secrets to the keyring."""
    config_path = get_config_path()

    # Set restrictive permissions
    config_path.touch(mode=0o600, exist_ok=True)

    data = {k: v for k, v in asdict(config).items() if k not in SECRET_FIELDS}
    with open(config_path, "w") as f:
        json.dump(data, f, indent=2)

    for name in SECRET_FIELDS:
        _set_secret(name, getattr(config, name))


def clear_config() -> bool:
    """Remove the config file and stored secrets. Returns True if a file existed."""
    for name in SECRET_FIELDS:
        _set_secret(name, None)

    config_path = get_config_path()
    if config_path.exists():
        config_path.unlink()
        return True
    return False
