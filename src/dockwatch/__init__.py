"""dockwatch - publish docker container stats to CloudWatch in batches."""

from dockwatch.core.models import (
    METRIC_NAMES,
    METRIC_UNITS,
    Dimension,
    MetricObservation,
    MetricRecord,
    UsageLine,
)
from dockwatch.core.observations import expand_record, observation
from dockwatch.core.publisher import BatchPublisher
from dockwatch.core.queue import MetricQueue
from dockwatch.core.records import parse_line, split_lines
from dockwatch.core.units import (
    parse_binary_bytes,
    parse_decimal_bytes,
    parse_percent,
    ratio_percent,
)

__all__ = [
    "METRIC_NAMES",
    "METRIC_UNITS",
    "BatchPublisher",
    "Dimension",
    "MetricObservation",
    "MetricQueue",
    "MetricRecord",
    "UsageLine",
    "expand_record",
    "observation",
    "parse_binary_bytes",
    "parse_decimal_bytes",
    "parse_line",
    "parse_percent",
    "ratio_percent",
    "split_lines",
]
