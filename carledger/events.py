"""Change notifications emitted by the in-memory stores."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List

_logger = logging.getLogger(__name__)


class EventKind(Enum):
    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"


@dataclass(frozen=True)
class StoreEvent:
    """A successful mutation: what happened, to which item, at which position."""

    kind: EventKind
    item: Any
    index: int


Listener = Callable[[StoreEvent], None]


class Observable:
    """
    Explicit subscribe/notify interface for store contents.

    Listeners are called synchronously, in registration order, after the
    mutation has been applied. A failing listener is logged and skipped so
    it cannot undo or block the mutation.
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], bool]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        """Remove a listener. Returns False if it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def _emit(self, kind: EventKind, item: Any, index: int) -> None:
        event = StoreEvent(kind=kind, item=item, index=index)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                _logger.warning(
                    "%s listener %r failed on %s", type(self).__name__, listener, kind.value,
                    exc_info=True,
                )
