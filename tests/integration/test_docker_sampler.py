"""Tests for the docker stats sampler using a stand-in executable."""

import logging
import signal
import stat
import sys
from pathlib import Path

import pytest

from dockwatch.adapters.sampler.docker import DOCKER_STATS_FORMAT, DockerStatsSampler
from dockwatch.core.errors import SamplerError

pytestmark = [
    pytest.mark.tier(2),
    pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell"),
]

STATS_OUTPUT = (
    "abc123\\tweb.1\\t12.34%%\\t100MiB / 200MiB\\t1kB / 2kB\\t3kB / 4kB\\n"
    "\\n"
    "def456\\tdb.1\\t0.50%%\\t1GiB / 4GiB\\t0B / 0B\\t5MB / 0B\\n"
)


def _fake_docker(tmp_path: Path, body: str) -> str:
    """Write an executable shell script standing in for the docker CLI."""
    script = tmp_path / "docker"
    script.write_text(f"#!/bin/sh\n{body}\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


class TestDockerStatsSampler:
    """Tests for DockerStatsSampler adapter."""

    def test_command_line(self) -> None:
        """The sampler asks for one non-streaming snapshot in tab format."""
        sampler = DockerStatsSampler(executable="/usr/bin/docker")

        assert sampler.command == [
            "/usr/bin/docker",
            "stats",
            "--no-stream",
            "--format",
            DOCKER_STATS_FORMAT,
        ]

    def test_format_has_six_tab_separated_columns(self) -> None:
        """The template produces the columns parse_line expects."""
        assert DOCKER_STATS_FORMAT.count("\t") == 5

    async def test_returns_non_blank_lines(self, tmp_path: Path) -> None:
        """Output is split into lines with blank lines dropped."""
        executable = _fake_docker(tmp_path, f"printf '{STATS_OUTPUT}'")

        lines = await DockerStatsSampler(executable=executable).sample()

        assert lines == [
            "abc123\tweb.1\t12.34%\t100MiB / 200MiB\t1kB / 2kB\t3kB / 4kB",
            "def456\tdb.1\t0.50%\t1GiB / 4GiB\t0B / 0B\t5MB / 0B",
        ]

    async def test_passes_arguments(self, tmp_path: Path) -> None:
        """The executable receives the stats arguments."""
        executable = _fake_docker(tmp_path, 'printf "%s|" "$@"')

        lines = await DockerStatsSampler(executable=executable).sample()

        assert lines == [f"stats|--no-stream|--format|{DOCKER_STATS_FORMAT}|"]

    async def test_non_zero_exit_raises(self, tmp_path: Path) -> None:
        """A failing command raises SamplerError with its stderr."""
        executable = _fake_docker(
            tmp_path, "echo 'partial\tline'; echo 'daemon not running' >&2; exit 3"
        )

        with pytest.raises(SamplerError) as excinfo:
            await DockerStatsSampler(executable=executable).sample()

        assert excinfo.value.returncode == 3
        assert "daemon not running" in excinfo.value.stderr
        assert "status 3" in str(excinfo.value)

    async def test_killed_process_reports_signal_status(self, tmp_path: Path) -> None:
        """A command killed by a signal keeps its negative exit status."""
        executable = _fake_docker(tmp_path, "kill -TERM $$")

        with pytest.raises(SamplerError) as excinfo:
            await DockerStatsSampler(executable=executable).sample()

        assert excinfo.value.returncode == -signal.SIGTERM

    async def test_stderr_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """stderr output is logged at ERROR even when the command succeeds."""
        executable = _fake_docker(tmp_path, "echo 'warning: slow' >&2")

        with caplog.at_level(logging.ERROR, logger="dockwatch.adapters.sampler.docker"):
            lines = await DockerStatsSampler(executable=executable).sample()

        assert lines == []
        assert any("warning: slow" in r.getMessage() for r in caplog.records)

    async def test_empty_output(self, tmp_path: Path) -> None:
        """No running containers means no lines."""
        executable = _fake_docker(tmp_path, "exit 0")

        assert await DockerStatsSampler(executable=executable).sample() == []
