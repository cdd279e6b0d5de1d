"""
numinv - Resources

This module contains all API resource classes.
"""

from numinv.resources.base import BaseResource
from numinv.resources.systems import SystemsResource
from numinv.resources.ranges import RangesResource
from numinv.resources.available import AvailableResource
from numinv.resources.reservations import ReservationsResource

__all__ = [
    "BaseResource",
    "SystemsResource",
    "RangesResource",
    "AvailableResource",
    "ReservationsResource",
]
