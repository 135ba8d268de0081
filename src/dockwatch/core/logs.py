"""Logging helpers shared by the pipeline."""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

_logger = logging.getLogger("dockwatch.timing")


@dataclass
class TimedResult:
    """Result object for the timed context manager."""

    label: str
    elapsed: float = 0.0


@contextmanager
def timed(
    label: str,
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
    **attributes: str | int | float | bool,
) -> Iterator[TimedResult]:
    """Context manager that logs the elapsed time of a phase on exit.

    The elapsed time is logged even when the block raises.

    Args:
        label: Phase name (e.g., "sample")
        logger: Logger to write to (default: "dockwatch.timing")
        level: Log level (default DEBUG)
        **attributes: Additional structured fields

    Yields:
        TimedResult whose ``elapsed`` is set once the block exits
    """
    result = TimedResult(label=label)
    start = time.perf_counter()
    try:
        yield result
    finally:
        result.elapsed = time.perf_counter() - start
        (logger or _logger).log(
            level,
            "%s: %.3fs",
            label,
            result.elapsed,
            extra={"phase": label, "elapsed_seconds": result.elapsed, **attributes},
        )
