"""VehicleStore - the set of tracked vehicles."""

import logging
from dataclasses import replace
from uuid import UUID

from .store import OrderedStore
from .vehicle import Vehicle

_logger = logging.getLogger(__name__)


class VehicleStore(OrderedStore[Vehicle]):
    """Tracked vehicles in the order they were added."""

    item_name = "vehicle"

    def add(self, vehicle: Vehicle) -> UUID:
        """Append a copy of vehicle and return its new id. Any id on the input is ignored."""
        return self._append(vehicle)

    def update(self, vehicle: Vehicle) -> bool:
        """
        Replace the stored vehicle that has vehicle.id with a copy of vehicle.

        Returns False and changes nothing if no stored vehicle has that id.
        """
        index = self._index_of(vehicle.id)
        if index is None:
            _logger.debug("Update vehicle %s: not found", vehicle.id)
            return False
        self._replace_at(index, replace(vehicle))
        return True
