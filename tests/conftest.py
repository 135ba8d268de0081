"""Shared test fixtures for all test modules."""

from collections.abc import Callable

import pytest

from dockwatch.adapters.backends.in_memory import InMemoryBackend
from dockwatch.core.models import Dimension, MetricObservation
from dockwatch.core.publisher import BatchPublisher

SAMPLE_LINE = "abc123\tweb.1\t12.34%\t100MiB / 200MiB\t1kB / 2kB\t3kB / 4kB"


class FakeSampler:
    """SamplerPort double returning canned lines or raising an error."""

    def __init__(
        self, lines: list[str] | None = None, error: Exception | None = None
    ) -> None:
        self.lines = lines or []
        self.error = error
        self.calls = 0

    async def sample(self) -> list[str]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.lines)


@pytest.fixture
def sample_line() -> str:
    """A well-formed docker stats line for task web.1."""
    return SAMPLE_LINE


@pytest.fixture
def backend() -> InMemoryBackend:
    """Fixture providing an empty recording backend."""
    return InMemoryBackend()


@pytest.fixture
def publisher(backend: InMemoryBackend) -> BatchPublisher:
    """Fixture providing a publisher writing to the recording backend."""
    return BatchPublisher(backend, "Test/Containers")


@pytest.fixture
def make_observation() -> Callable[..., MetricObservation]:
    """Factory fixture for observations with a fixed timestamp.

    Usage:
        def test_something(make_observation):
            item = make_observation(value=3.0)
    """

    def _make(
        metric_name: str = "CPUUsage",
        value: float = 1.0,
        unit: str = "Percent",
        task: str = "web.1",
        timestamp: float = 1702300000.0,
    ) -> MetricObservation:
        return MetricObservation(
            metric_name=metric_name,
            value=value,
            timestamp=timestamp,
            unit=unit,
            dimensions=(Dimension("TaskID", task),),
        )

    return _make


@pytest.fixture
def fake_sampler() -> Callable[..., FakeSampler]:
    """Factory fixture for SamplerPort doubles."""
    return FakeSampler
