"""
numinv - Systems Resource

This module provides lookups of the telephony systems the inventory
server manages.
"""

from __future__ import annotations

from typing import List

from numinv.resources.base import BaseResource
from numinv.models import InventorySystem
from numinv.config import Endpoints


class SystemsResource(BaseResource):
    """
    Resource for telephony systems.

    Example:
        >>> for system in client.systems.list():
        ...     print(system.id, system.name, system.system_type.value)
    """

    def list(self) -> List[InventorySystem]:
        """
        List all systems.

        Returns:
            List of InventorySystem objects
        """
        response = self._get(Endpoints.SYSTEMS)
        return [InventorySystem.from_dict(item) for item in self._items(response)]

    def get(self, system_id: int) -> InventorySystem:
        """
        Get a system by ID.

        Args:
            system_id: The system's numeric identifier

        Returns:
            InventorySystem object
        """
        path = Endpoints.SYSTEM.format(system_id=self._segment(system_id))
        return InventorySystem.from_dict(self._get(path))
