"""In-memory backend adapter."""

from collections.abc import Callable, Sequence
from typing import Any

from dockwatch.core.errors import BackendError


class InMemoryBackend:
    """In-memory implementation of MetricBackendPort.

    Records every batch instead of sending it. Suitable for testing and
    dry runs where no AWS account is available.

    Args:
        fail_on: Optional predicate over a batch; when it returns True the
            batch is rejected with BackendError and not recorded.
    """

    def __init__(
        self,
        fail_on: Callable[[Sequence[dict[str, Any]]], bool] | None = None,
    ) -> None:
        self._calls: list[tuple[str, list[dict[str, Any]]]] = []
        self._fail_on = fail_on

    @property
    def calls(self) -> list[tuple[str, list[dict[str, Any]]]]:
        """Recorded ``(namespace, metric_data)`` pairs in submission order."""
        return list(self._calls)

    @property
    def data_points(self) -> list[dict[str, Any]]:
        """All recorded data points, concatenated in submission order."""
        return [datum for _, metric_data in self._calls for datum in metric_data]

    async def put_metric_data(
        self, namespace: str, metric_data: Sequence[dict[str, Any]]
    ) -> dict[str, Any]:
        """Record one batch of data points."""
        if self._fail_on is not None and self._fail_on(metric_data):
            raise BackendError(f"batch of {len(metric_data)} data points rejected")
        self._calls.append((namespace, list(metric_data)))
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def clear(self) -> None:
        """Forget all recorded batches."""
        self._calls.clear()
