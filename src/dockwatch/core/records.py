"""Parsing of raw `docker stats` lines into metric records."""

from collections.abc import Iterable

from dockwatch.core.models import MetricRecord, UsageLine
from dockwatch.core.units import (
    parse_binary_bytes,
    parse_decimal_bytes,
    parse_percent,
    ratio_percent,
)


def service_name(task_name: str) -> str:
    """Return the service part of a task name (text before the first ``.``)."""
    return task_name.split(".", 1)[0]


def split_pair(text: str) -> tuple[str, str]:
    """Split ``"<first> / <second>"`` into two trimmed tokens.

    A missing side comes back as an empty string.
    """
    first, _, second = text.partition("/")
    return first.strip(), second.strip()


def split_lines(chunks: Iterable[bytes | str]) -> list[str]:
    """Reassemble sampler output chunks and split them into non-blank lines.

    Args:
        chunks: Output pieces as read from the process, bytes or text.

    Returns:
        Lines in output order, blank lines removed.
    """
    text = "".join(
        chunk.decode("utf-8", errors="replace") if isinstance(chunk, bytes) else chunk
        for chunk in chunks
    )
    return [line for line in text.split("\n") if line.strip()]


def parse_line(line: str) -> MetricRecord:
    """Parse one tab-delimited usage line into a MetricRecord.

    Numeric columns never raise: an unparseable value becomes 0.

    Args:
        line: ``id, name, cpu, mem used/limit, net, block read/write``
            separated by tabs.

    Returns:
        MetricRecord with every metric in METRIC_NAMES populated.

    Raises:
        ValueError: If the line does not have exactly six fields.
    """
    usage = UsageLine.from_text(line)

    mem_used, mem_limit = (parse_binary_bytes(v) for v in split_pair(usage.mem_usage))
    # first network token is reported as Tx, second as Rx
    net_tx, net_rx = (parse_decimal_bytes(v) for v in split_pair(usage.net_io))
    block_read, block_write = (
        parse_decimal_bytes(v) for v in split_pair(usage.block_io)
    )

    return MetricRecord(
        task_name=usage.name,
        service_name=service_name(usage.name),
        values={
            "CPUUsage": parse_percent(usage.cpu_percent),
            "MemUsed": mem_used,
            "MemLimit": mem_limit,
            "MemPercent": ratio_percent(mem_used, mem_limit),
            "NetworkTx": net_tx,
            "NetworkRx": net_rx,
            "BlockIORead": block_read,
            "BlockIOWrite": block_write,
        },
    )
