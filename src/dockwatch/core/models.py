"""Core domain models for container usage metrics."""

import math
from dataclasses import dataclass, field

METRIC_NAMES = (
    "CPUUsage",
    "MemUsed",
    "MemLimit",
    "MemPercent",
    "NetworkTx",
    "NetworkRx",
    "BlockIORead",
    "BlockIOWrite",
)

# CloudWatch unit per published metric
METRIC_UNITS = {
    "CPUUsage": "Percent",
    "MemUsed": "Bytes",
    "MemLimit": "Bytes",
    "MemPercent": "Percent",
    "NetworkRx": "Bytes/Second",
    "NetworkTx": "Bytes/Second",
    "BlockIORead": "Bytes/Second",
    "BlockIOWrite": "Bytes/Second",
}

# Maximum number of data points accepted by a single PutMetricData call
MAX_BATCH_SIZE = 20

DEFAULT_UNIT = "None"

USAGE_FIELD_COUNT = 6


@dataclass(frozen=True)
class UsageLine:
    """One raw line of `docker stats` output, split into its columns.

    Attributes:
        id: Container ID.
        name: Container (task) name, e.g. ``web.1.abc``.
        cpu_percent: CPU text, e.g. ``12.34%``.
        mem_usage: Memory text, ``<used> / <limit>``.
        net_io: Network text, ``<first> / <second>``.
        block_io: Block IO text, ``<read> / <write>``.
    """

    id: str
    name: str
    cpu_percent: str
    mem_usage: str
    net_io: str
    block_io: str

    @classmethod
    def from_text(cls, line: str) -> "UsageLine":
        """Split a tab-delimited line into trimmed fields.

        Raises:
            ValueError: If the line does not have exactly six fields.
        """
        fields = [item.strip() for item in line.split("\t")]
        if len(fields) != USAGE_FIELD_COUNT:
            raise ValueError(
                f"usage line must have {USAGE_FIELD_COUNT} tab-separated fields, "
                f"got {len(fields)}: {line!r}"
            )
        return cls(*fields)


@dataclass(frozen=True)
class MetricRecord:
    """Parsed usage of one task.

    Attributes:
        task_name: Full container name.
        service_name: Part of the task name before the first ``.``.
        values: Metric name to numeric value, one entry per METRIC_NAMES.
    """

    task_name: str
    service_name: str
    values: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Dimension:
    """A name/value tag attached to a data point."""

    name: str
    value: str


@dataclass(frozen=True)
class MetricObservation:
    """A single metric value waiting to be published.

    Attributes:
        metric_name: Metric name (e.g., CPUUsage).
        value: The metric value.
        timestamp: Unix timestamp in seconds, captured at publish time.
        unit: CloudWatch unit name. ``None`` is stored as ``"None"``.
        dimensions: Ordered dimension set identifying the subject.
    """

    metric_name: str
    value: float
    timestamp: float
    unit: str = DEFAULT_UNIT
    dimensions: tuple[Dimension, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.metric_name, str):
            raise TypeError("metric_name is required and must be a string")
        if not self.metric_name:
            raise ValueError("metric_name must not be empty")
        # bool is an int subclass but never a meaningful metric value
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(
                f"value for {self.metric_name} is required and must be a number"
            )
        try:
            finite = math.isfinite(self.value)
        except OverflowError:
            # int too large to convert to float
            finite = False
        if not finite:
            raise ValueError(f"value for {self.metric_name} must be finite")
        if self.unit is None:
            object.__setattr__(self, "unit", DEFAULT_UNIT)
        object.__setattr__(self, "dimensions", tuple(self.dimensions))
