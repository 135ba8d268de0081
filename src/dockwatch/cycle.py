"""Sampling cycle and the periodic scheduler that drives it."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from dockwatch.core.logs import timed
from dockwatch.core.models import Dimension, MetricRecord
from dockwatch.core.observations import (
    DEFAULT_DIMENSION_SETS,
    DimensionSet,
    expand_record,
)
from dockwatch.core.ports import SamplerPort
from dockwatch.core.publisher import BatchPublisher
from dockwatch.core.records import parse_line

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    """Outcome of one sample-parse-publish pass."""

    records: list[MetricRecord] = field(default_factory=list)
    chunks: list[Any] = field(default_factory=list)


class StatsCycle:
    """One pass of sampling, parsing, queueing and flushing.

    Args:
        sampler: Source of raw usage lines.
        publisher: Publisher the observations are queued on and flushed by.
        base_dimensions: Dimensions added to every observation.
        dimension_sets: Dimension sets every metric is fanned out over.
    """

    def __init__(
        self,
        sampler: SamplerPort,
        publisher: BatchPublisher,
        base_dimensions: Sequence[Dimension] = (),
        dimension_sets: Sequence[DimensionSet] = DEFAULT_DIMENSION_SETS,
    ) -> None:
        self._sampler = sampler
        self._publisher = publisher
        self._base_dimensions = tuple(base_dimensions)
        self._dimension_sets = tuple(dimension_sets)

    @property
    def sampler(self) -> SamplerPort:
        return self._sampler

    @property
    def publisher(self) -> BatchPublisher:
        return self._publisher

    @property
    def base_dimensions(self) -> tuple[Dimension, ...]:
        return self._base_dimensions

    async def run(self) -> CycleResult:
        """Run one cycle.

        Every line is parsed and expanded into observations before anything
        is queued, so a malformed line fails the cycle without touching the
        queue.

        Raises:
            SamplerError: If sampling failed.
            ValueError: If a line does not have the expected fields.
        """
        logger.info("Initiating metric update")

        with timed("sample", logger):
            lines = await self._sampler.sample()

        with timed("parse", logger):
            records = [parse_line(line) for line in lines]
            observations = [
                item
                for record in records
                for item in expand_record(
                    record, self._base_dimensions, self._dimension_sets
                )
            ]

        with timed("publish", logger):
            for item in observations:
                await self._publisher.publish(item)
        logger.info(
            "Parsed and queued %d metric sets",
            len(records),
            extra={"records": len(records)},
        )

        with timed("flush", logger):
            chunks = await self._publisher.flush()
        logger.info(
            "Flushed metrics in %d chunks",
            len(chunks),
            extra={"chunk_count": len(chunks)},
        )
        return CycleResult(records=records, chunks=chunks)


async def tick(cycle: StatsCycle) -> CycleResult | None:
    """Run one cycle, logging any failure instead of raising it.

    Returns:
        The cycle result, or None if the cycle failed.
    """
    try:
        return await cycle.run()
    except Exception:
        logger.exception("Metric update failed")
        return None


async def run_forever(
    cycle: StatsCycle,
    interval: float,
    stop: asyncio.Event | None = None,
) -> int:
    """Start a cycle every ``interval`` seconds until ``stop`` is set.

    Cycles are started as independent tasks, so a cycle that outlasts the
    interval overlaps the next one. In-flight cycles are awaited on stop.

    Returns:
        Number of cycles started.
    """
    if interval <= 0:
        raise ValueError("interval must be positive")
    stop = stop or asyncio.Event()
    in_flight: set[asyncio.Task[CycleResult | None]] = set()
    started = 0
    loop = asyncio.get_running_loop()
    next_tick = loop.time() + interval

    while not stop.is_set():
        try:
            await asyncio.wait_for(stop.wait(), timeout=next_tick - loop.time())
            break
        except asyncio.TimeoutError:
            pass
        next_tick += interval
        task = asyncio.create_task(tick(cycle))
        in_flight.add(task)
        task.add_done_callback(in_flight.discard)
        started += 1

    if in_flight:
        await asyncio.gather(*in_flight)
    return started
