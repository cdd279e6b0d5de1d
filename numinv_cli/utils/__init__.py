"""CLI utilities."""

from .config import Config, load_config, save_config
from .client import get_client
from .output import format_output, print_json, print_yaml

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "get_client",
    "format_output",
    "print_json",
    "print_yaml",
]
