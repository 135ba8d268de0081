"""In-memory queue of observations waiting to be flushed."""

import threading

from dockwatch.core.models import MetricObservation


class MetricQueue:
    """In-memory implementation of MetricQueuePort.

    Keeps observations in insertion order until they are drained. Enqueue
    and drain are serialized by a lock, so concurrent producers (tasks or
    threads) never lose or duplicate an entry.

    There is no capacity bound: a backend that stays unreachable lets the
    queue grow until the next successful drain.
    """

    def __init__(self) -> None:
        self._items: list[MetricObservation] = []
        self._lock = threading.Lock()

    def enqueue(self, observation: MetricObservation) -> None:
        """Append an observation at the tail."""
        with self._lock:
            self._items.append(observation)

    def drain_all(self) -> list[MetricObservation]:
        """Remove and return every queued observation in insertion order."""
        with self._lock:
            drained, self._items = self._items, []
        return drained

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
