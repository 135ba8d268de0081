"""Port interfaces for the adapters around the publishing pipeline.

The core depends only on these protocols, not on docker, boto3 or a
particular queue implementation.
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from dockwatch.core.models import MetricObservation


@runtime_checkable
class MetricQueuePort(Protocol):
    """Port for the buffer of observations waiting to be flushed.

    Examples: MetricQueue.
    """

    def enqueue(self, observation: MetricObservation) -> None:
        """Append an observation at the tail."""
        ...

    def drain_all(self) -> list[MetricObservation]:
        """Atomically remove and return every queued observation.

        Returns:
            Observations in insertion order. Empty list if nothing is queued.
        """
        ...


@runtime_checkable
class MetricBackendPort(Protocol):
    """Port for the service that receives batches of data points.

    Examples: CloudWatchBackend, InMemoryBackend.
    """

    async def put_metric_data(
        self, namespace: str, metric_data: Sequence[dict[str, Any]]
    ) -> Any:
        """Send one batch of data points.

        Args:
            namespace: Metric namespace.
            metric_data: At most MAX_BATCH_SIZE metric datums.

        Returns:
            The backend response for this batch.
        """
        ...


@runtime_checkable
class SamplerPort(Protocol):
    """Port for the source of raw usage lines.

    Examples: DockerStatsSampler.
    """

    async def sample(self) -> list[str]:
        """Return one non-blank raw usage line per running container."""
        ...
