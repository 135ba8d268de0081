"""Metrics backend adapters implementing MetricBackendPort."""

from dockwatch.adapters.backends.cloudwatch import CloudWatchBackend
from dockwatch.adapters.backends.in_memory import InMemoryBackend

__all__ = ["CloudWatchBackend", "InMemoryBackend"]
