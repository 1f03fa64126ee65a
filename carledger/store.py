"""Ordered in-memory collection shared by VehicleStore and FuelLedger."""

import logging
from dataclasses import replace
from typing import Generic, Iterable, Iterator, List, Optional, Set, TypeVar
from uuid import UUID, uuid4

from .events import EventKind, Observable

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrderedStore(Observable, Generic[T]):
    """
    Insertion-ordered records keyed by a store-assigned UUID.

    Items are dataclasses with an ``id`` field. The store keeps its own
    copies: callers get copies back from list()/get(), so stored records
    only change through the mutators. Not-found is reported as a False
    (or zero) return, never as an exception.
    """

    item_name = "item"

    def __init__(self):
        super().__init__()
        self._items: List[T] = []
        self._issued: Set[UUID] = set()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())

    def list(self) -> List[T]:
        """Snapshot of all items in insertion order."""
        return [replace(item) for item in self._items]

    def get(self, item_id: UUID) -> Optional[T]:
        """Find an item by id."""
        index = self._index_of(item_id)
        if index is None:
            return None
        return replace(self._items[index])

    def remove(self, item_id: UUID) -> bool:
        """Delete the item with the given id."""
        index = self._index_of(item_id)
        if index is None:
            _logger.debug("Remove %s %s: not found", self.item_name, item_id)
            return False
        return self.remove_at(index)

    def remove_at(self, index: int) -> bool:
        """Delete the item at a position. Negative positions are out of range."""
        if index < 0 or index >= len(self._items):
            _logger.debug("Remove %s at %d: out of range", self.item_name, index)
            return False
        item = self._items.pop(index)
        _logger.debug("Removed %s %s at %d", self.item_name, item.id, index)
        self._emit(EventKind.REMOVED, replace(item), index)
        return True

    def remove_offsets(self, indices: Iterable[int]) -> int:
        """
        Delete several positions at once. Returns how many were removed.

        Positions refer to the list as it was before the call; duplicates
        and out-of-range positions are ignored.
        """
        removed = 0
        for index in sorted(set(indices), reverse=True):
            if self.remove_at(index):
                removed += 1
        return removed

    def _index_of(self, item_id: Optional[UUID]) -> Optional[int]:
        if item_id is None:
            return None
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return None

    def _new_id(self) -> UUID:
        item_id = uuid4()
        while item_id in self._issued:
            item_id = uuid4()
        self._issued.add(item_id)
        return item_id

    def _append(self, item: T) -> UUID:
        """Store a copy of item under a fresh id."""
        stored = replace(item, id=self._new_id())
        self._items.append(stored)
        index = len(self._items) - 1
        _logger.debug("Added %s %s at %d", self.item_name, stored.id, index)
        self._emit(EventKind.ADDED, replace(stored), index)
        return stored.id

    def _replace_at(self, index: int, item: T) -> None:
        self._items[index] = item
        _logger.debug("Updated %s %s at %d", self.item_name, item.id, index)
        self._emit(EventKind.UPDATED, replace(item), index)
