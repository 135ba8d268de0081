"""Tests for the in-memory metric queue."""

import asyncio
import threading
from collections.abc import Callable

import pytest

from dockwatch.core.models import MetricObservation
from dockwatch.core.ports import MetricQueuePort
from dockwatch.core.queue import MetricQueue

pytestmark = [pytest.mark.queue, pytest.mark.tier(1)]


class TestMetricQueue:
    """Tests for MetricQueue."""

    def test_implements_metric_queue_port(self) -> None:
        """MetricQueue must satisfy MetricQueuePort protocol."""
        assert isinstance(MetricQueue(), MetricQueuePort)

    def test_drain_returns_insertion_order(
        self, make_observation: Callable[..., MetricObservation]
    ) -> None:
        """drain_all() returns observations in the order they were queued."""
        queue = MetricQueue()
        items = [make_observation(value=float(i)) for i in range(5)]

        for item in items:
            queue.enqueue(item)

        assert queue.drain_all() == items

    def test_drain_empties_queue(
        self, make_observation: Callable[..., MetricObservation]
    ) -> None:
        """A second drain returns nothing."""
        queue = MetricQueue()
        queue.enqueue(make_observation())

        queue.drain_all()

        assert queue.drain_all() == []
        assert len(queue) == 0

    def test_drain_empty_queue(self) -> None:
        """Draining an empty queue returns an empty list."""
        assert MetricQueue().drain_all() == []

    def test_keeps_duplicates(
        self, make_observation: Callable[..., MetricObservation]
    ) -> None:
        """Equal observations are not deduplicated."""
        queue = MetricQueue()
        item = make_observation()

        queue.enqueue(item)
        queue.enqueue(item)

        assert queue.drain_all() == [item, item]

    def test_len_counts_pending(
        self, make_observation: Callable[..., MetricObservation]
    ) -> None:
        """len() reports the number of queued observations."""
        queue = MetricQueue()
        for _ in range(3):
            queue.enqueue(make_observation())

        assert len(queue) == 3


class TestMetricQueueConcurrency:
    """Concurrent enqueue and drain never lose or duplicate entries."""

    def test_threads_interleaved_with_drains(
        self, make_observation: Callable[..., MetricObservation]
    ) -> None:
        """Every observation enqueued by any thread is drained exactly once."""
        queue = MetricQueue()
        producers = 8
        per_producer = 500
        drained: list[MetricObservation] = []
        done = threading.Event()

        def produce(worker: int) -> None:
            for i in range(per_producer):
                queue.enqueue(make_observation(task=f"w{worker}", value=float(i)))

        def consume() -> None:
            while not done.is_set():
                drained.extend(queue.drain_all())

        consumer = threading.Thread(target=consume)
        consumer.start()
        threads = [threading.Thread(target=produce, args=(w,)) for w in range(producers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        done.set()
        consumer.join()
        drained.extend(queue.drain_all())

        assert len(drained) == producers * per_producer
        for worker in range(producers):
            values = [
                o.value for o in drained if o.dimensions[0].value == f"w{worker}"
            ]
            assert values == [float(i) for i in range(per_producer)]

    async def test_tasks_interleaved_with_drains(
        self, make_observation: Callable[..., MetricObservation]
    ) -> None:
        """Enqueues from many tasks and periodic drains partition the input."""
        queue = MetricQueue()
        drains: list[list[MetricObservation]] = []

        async def produce(worker: int) -> None:
            for i in range(50):
                queue.enqueue(make_observation(task=f"t{worker}", value=float(i)))
                await asyncio.sleep(0)

        async def consume() -> None:
            for _ in range(20):
                drains.append(queue.drain_all())
                await asyncio.sleep(0)

        await asyncio.gather(consume(), *(produce(w) for w in range(10)))
        drains.append(queue.drain_all())

        flat = [item for batch in drains for item in batch]
        assert len(flat) == 500
        assert len({id(item) for item in flat}) == 500
