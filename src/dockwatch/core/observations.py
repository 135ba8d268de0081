"""Helpers for building MetricObservation objects."""

import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from dockwatch.core.models import (
    DEFAULT_UNIT,
    METRIC_UNITS,
    Dimension,
    MetricObservation,
    MetricRecord,
)


def observation(
    metric_name: str,
    value: float,
    unit: str | None = None,
    dimensions: Iterable[Dimension] = (),
) -> MetricObservation:
    """Create an observation stamped with the current time.

    Args:
        metric_name: Metric name (e.g., "CPUUsage")
        value: Observed value
        unit: CloudWatch unit (default: "None")
        dimensions: Ordered dimension set

    Returns:
        MetricObservation with current timestamp

    Raises:
        TypeError: If metric_name is not a string or value is not a number.
        ValueError: If metric_name is empty or value is not finite.
    """
    return MetricObservation(
        metric_name=metric_name,
        value=value,
        timestamp=time.time(),
        unit=unit or DEFAULT_UNIT,
        dimensions=tuple(dimensions),
    )


@dataclass(frozen=True)
class DimensionSet:
    """One way of identifying a record, e.g. by service or by task."""

    name: str
    source: Callable[[MetricRecord], str]

    def dimension(self, record: MetricRecord) -> Dimension:
        return Dimension(name=self.name, value=self.source(record))


DEFAULT_DIMENSION_SETS = (
    DimensionSet("Service", lambda record: record.service_name),
    DimensionSet("TaskID", lambda record: record.task_name),
)


def expand_record(
    record: MetricRecord,
    base_dimensions: Sequence[Dimension] = (),
    dimension_sets: Sequence[DimensionSet] = DEFAULT_DIMENSION_SETS,
    units: Mapping[str, str] = METRIC_UNITS,
) -> list[MetricObservation]:
    """Expand a record into one observation per metric and dimension set.

    Metrics without a configured unit are skipped. With the default
    dimension sets every metric yields two observations, the Service one
    followed by the TaskID one.

    Args:
        record: Parsed usage record.
        base_dimensions: Dimensions shared by every observation (e.g. Stack).
        dimension_sets: Dimension sets to fan out over, in order.
        units: Unit per metric name.

    Returns:
        Observations in metric order, then dimension set order.
    """
    base = tuple(base_dimensions)
    observations: list[MetricObservation] = []
    for name, value in record.values.items():
        if name not in units:
            continue
        for dimension_set in dimension_sets:
            observations.append(
                observation(
                    name,
                    value,
                    unit=units[name],
                    dimensions=(*base, dimension_set.dimension(record)),
                )
            )
    return observations
