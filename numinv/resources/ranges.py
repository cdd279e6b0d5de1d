"""
numinv - Ranges Resource

This module provides lookups of the number ranges defined on a system.
"""

from __future__ import annotations

from typing import List

from numinv.resources.base import BaseResource
from numinv.models import NumberRange
from numinv.config import Endpoints


class RangesResource(BaseResource):
    """
    Resource for number ranges.

    A range is a named block of numbers from which reservations draw.

    Example:
        >>> ranges = client.ranges.list(system_id=3)
        >>> main = client.ranges.get(system_id=3, range_name="Main")
        >>> print(main.available)
    """

    def list(self, system_id: int) -> List[NumberRange]:
        """
        List the ranges of a system.

        Args:
            system_id: The system's numeric identifier

        Returns:
            List of NumberRange objects
        """
        path = Endpoints.RANGES.format(system_id=self._segment(system_id))
        response = self._get(path)
        return [NumberRange.from_dict(system_id, item) for item in self._items(response)]

    def get(self, system_id: int, range_name: str) -> NumberRange:
        """
        Get one range by name.

        Args:
            system_id: The system's numeric identifier
            range_name: Name of the range

        Returns:
            NumberRange object
        """
        path = Endpoints.RANGE.format(
            system_id=self._segment(system_id),
            range_name=self._segment(range_name),
        )
        return NumberRange.from_dict(system_id, self._get(path))
