"""Run the stats publisher until interrupted.

Run with:
    NAMESPACE=Containers STACK_NAME=prod REGION=eu-west-1 python -m dockwatch

Environment:
    NAMESPACE   - CloudWatch namespace (required)
    STACK_NAME  - value of the Stack dimension
    REGION      - AWS region
    INTERVAL    - seconds between cycles (default 10)
    DISABLED    - dry run, nothing is sent to CloudWatch
    LOG_LEVEL   - log level name (default INFO)
    DOCKER      - docker executable (default docker)
"""

import asyncio
import logging
import signal
import sys
from collections.abc import Mapping

from dockwatch.adapters.backends.cloudwatch import CloudWatchBackend
from dockwatch.adapters.sampler.docker import DockerStatsSampler
from dockwatch.config import Settings
from dockwatch.core.errors import ConfigurationError
from dockwatch.core.publisher import BatchPublisher
from dockwatch.cycle import StatsCycle, run_forever

logger = logging.getLogger("dockwatch")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_cycle(settings: Settings) -> StatsCycle:
    """Wire the production adapters for the given settings."""
    publisher = BatchPublisher(
        CloudWatchBackend(region_name=settings.region),
        settings.namespace,
        disabled=settings.disabled,
    )
    return StatsCycle(
        DockerStatsSampler(executable=settings.docker),
        publisher,
        base_dimensions=settings.base_dimensions,
    )


async def _serve(settings: Settings) -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # not available on Windows event loops
            pass
    await run_forever(build_cycle(settings), settings.interval, stop)


def main(environ: Mapping[str, str] | None = None) -> int:
    try:
        settings = Settings.from_env(environ)
    except ConfigurationError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("Invalid configuration: %s", e)
        return 2

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logger.info(
        "Publishing container stats every %ss to namespace %s",
        settings.interval,
        settings.namespace,
        extra={"disabled": settings.disabled, "stack_name": settings.stack_name},
    )
    asyncio.run(_serve(settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
