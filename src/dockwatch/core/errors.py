"""Exceptions raised by dockwatch."""


class DockwatchError(Exception):
    """Base class for dockwatch errors."""


class ConfigurationError(DockwatchError, ValueError):
    """Raised when the environment does not describe a usable configuration."""


class SamplerError(DockwatchError):
    """Raised when the stats command exits with a non-zero status.

    Attributes:
        returncode: Exit status of the process.
        stderr: Captured standard error output.
    """

    def __init__(self, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        message = f"stats command exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class BackendError(DockwatchError):
    """Raised when a metrics backend rejects a batch."""
