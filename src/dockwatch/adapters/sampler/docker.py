"""Sampler adapter that reads usage lines from `docker stats`."""

import asyncio
import logging

from dockwatch.core.errors import SamplerError
from dockwatch.core.records import split_lines

logger = logging.getLogger(__name__)

DOCKER_STATS_FORMAT = (
    "{{.ID}}\t{{.Name}}\t{{.CPUPerc}}\t{{.MemUsage}}\t{{.NetIO}}\t{{.BlockIO}}"
)


class DockerStatsSampler:
    """Implementation of SamplerPort backed by `docker stats --no-stream`.

    Args:
        executable: Docker CLI to run.
        format_template: Go template passed to ``--format``; must produce
            the six tab-separated columns parse_line expects.
    """

    def __init__(
        self,
        executable: str = "docker",
        format_template: str = DOCKER_STATS_FORMAT,
    ) -> None:
        self._executable = executable
        self._format_template = format_template

    @property
    def command(self) -> list[str]:
        return [
            self._executable,
            "stats",
            "--no-stream",
            "--format",
            self._format_template,
        ]

    async def sample(self) -> list[str]:
        """Run the stats command once and return its non-blank lines.

        Raises:
            SamplerError: If the command exits with a non-zero status.
        """
        process = await asyncio.create_subprocess_exec(
            *self.command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()
        err_text = stderr.decode("utf-8", errors="replace")

        if err_text.strip():
            logger.error("stderr: %s", err_text.strip())
        logger.debug("stdout: %s", stdout.decode("utf-8", errors="replace"))

        if process.returncode != 0:
            raise SamplerError(process.returncode, err_text)
        return split_lines([stdout])
