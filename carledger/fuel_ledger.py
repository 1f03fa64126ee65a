"""FuelLedger - the set of fuel purchase records."""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional
from uuid import UUID

from .fuel_entry import FuelEntry
from .store import OrderedStore

_logger = logging.getLogger(__name__)


class FuelLedger(OrderedStore[FuelEntry]):
    """Fuel purchases in the order they were recorded."""

    item_name = "fuel entry"

    def add(self, entry: FuelEntry, car_model: str) -> UUID:
        """Append a copy of entry stamped with car_model and return its new id."""
        return self._append(replace(entry, car_model=car_model))

    def update(
        self,
        entry_id: UUID,
        date: Optional[datetime] = None,
        fuel_quantity: Optional[float] = None,
        cost: Optional[float] = None,
    ) -> bool:
        """
        Edit the mutable fields of an entry. Fields left as None are kept.

        car_model is fixed once the entry is recorded. Returns False and
        changes nothing if entry_id is unknown.
        """
        index = self._index_of(entry_id)
        if index is None:
            _logger.debug("Update fuel entry %s: not found", entry_id)
            return False
        changes = {}
        if date is not None:
            changes["date"] = date
        if fuel_quantity is not None:
            changes["fuel_quantity"] = fuel_quantity
        if cost is not None:
            changes["cost"] = cost
        self._replace_at(index, replace(self._items[index], **changes))
        return True
