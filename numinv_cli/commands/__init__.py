"""CLI command modules."""

from .systems import systems
from .ranges import ranges
from .numbers import numbers
from .reservations import reservations
from .config import config

__all__ = [
    "systems",
    "ranges",
    "numbers",
    "reservations",
    "config",
]
