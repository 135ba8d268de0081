"""Batch publisher that turns queued observations into bulk backend calls."""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from dockwatch.core.models import MAX_BATCH_SIZE, MetricObservation
from dockwatch.core.ports import MetricBackendPort, MetricQueuePort
from dockwatch.core.queue import MetricQueue

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into contiguous slices of at most ``size`` elements.

    Args:
        items: Sequence to split.
        size: Maximum slice length, at least 1.

    Returns:
        ``ceil(len(items) / size)`` slices whose concatenation is ``items``.
    """
    if size < 1:
        raise ValueError("size must be at least 1")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def to_metric_datum(observation: MetricObservation) -> dict[str, Any]:
    """Convert an observation to a PutMetricData datum."""
    return {
        "MetricName": observation.metric_name,
        "Dimensions": [
            {"Name": dimension.name, "Value": dimension.value}
            for dimension in observation.dimensions
        ],
        "Timestamp": datetime.fromtimestamp(observation.timestamp, tz=timezone.utc),
        "Unit": observation.unit,
        "Value": observation.value,
    }


class BatchPublisher:
    """Publishes observations to a metrics backend in bounded chunks.

    Observations are queued by default and sent by flush(). Every chunk of
    a flush is submitted concurrently; the flush fails with the first chunk
    error once all submissions have settled. Chunks that succeeded are not
    rolled back and nothing is retried.

    Example:
        ```python
        publisher = BatchPublisher(CloudWatchBackend(), "Containers")
        await publisher.publish(observation("CPUUsage", 12.5, unit="Percent"))
        await publisher.flush()
        ```
    """

    def __init__(
        self,
        backend: MetricBackendPort,
        namespace: str,
        queue: MetricQueuePort | None = None,
        *,
        disabled: bool = False,
        chunk_size: int = MAX_BATCH_SIZE,
    ) -> None:
        """Initialize the publisher.

        Args:
            backend: Backend adapter implementing MetricBackendPort.
            namespace: Metric namespace sent with every batch.
            queue: Queue to buffer observations in. Defaults to a new
                MetricQueue owned by this publisher.
            disabled: When True, flush() and immediate publish() never
                contact the backend and report success.
            chunk_size: Observations per backend call, 1 to MAX_BATCH_SIZE.
        """
        if backend is None:
            raise TypeError("backend is required")
        if not isinstance(namespace, str):
            raise TypeError("namespace is required and must be a string")
        if not 1 <= chunk_size <= MAX_BATCH_SIZE:
            raise ValueError(f"chunk_size must be between 1 and {MAX_BATCH_SIZE}")
        self._backend = backend
        self._namespace = namespace
        self._queue = queue if queue is not None else MetricQueue()
        self._disabled = disabled
        self._chunk_size = chunk_size

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def disabled(self) -> bool:
        return self._disabled

    @property
    def queue(self) -> MetricQueuePort:
        return self._queue

    async def publish(
        self, observation: MetricObservation, immediate: bool = False
    ) -> Any:
        """Queue an observation, or send it right away.

        Args:
            observation: The observation to publish.
            immediate: Bypass the queue and send a one-element chunk.

        Returns:
            ``{}`` when queued, otherwise the list of backend responses.

        Raises:
            TypeError: If observation is not a MetricObservation.
        """
        if not isinstance(observation, MetricObservation):
            raise TypeError("observation must be a MetricObservation")
        if not immediate:
            self._queue.enqueue(observation)
            return {}
        return await self._send([observation])

    async def flush(self) -> list[Any]:
        """Drain the queue and send everything in chunks.

        Returns:
            One backend response per chunk, in chunk order.

        Raises:
            Exception: The first chunk failure, after every chunk settled.
        """
        return await self._send(self._queue.drain_all())

    async def _send(self, items: list[MetricObservation]) -> list[Any]:
        if self._disabled or not items:
            logger.debug(
                "Nothing to synchronize",
                extra={"observations": len(items), "disabled": self._disabled},
            )
            return []

        chunks = chunked(items, self._chunk_size)
        results = await asyncio.gather(
            *(self._send_chunk(chunk) for chunk in chunks),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error(
                "Failed to send %d of %d chunks",
                len(failures),
                len(chunks),
                extra={"namespace": self._namespace, "chunks": len(chunks)},
            )
            raise failures[0]

        logger.debug(
            "Sent %d observations in %d chunks",
            len(items),
            len(chunks),
            extra={"namespace": self._namespace},
        )
        return list(results)

    async def _send_chunk(self, chunk: list[MetricObservation]) -> Any:
        metric_data = [to_metric_datum(item) for item in chunk]
        return await self._backend.put_metric_data(self._namespace, metric_data)
