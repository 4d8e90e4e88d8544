"""Error hierarchy: every failure carries the exit code the CLI should use."""

from __future__ import annotations

from pathlib import Path


class BuildpackError(Exception):
    exit_code: int = 1


class ManifestError(BuildpackError):
    pass


class ResolveError(BuildpackError):
    pass


class DownloadError(BuildpackError):
    pass


class CommandFailed(BuildpackError):
    """An external command exited non-zero.

    ``exit_code`` is the command's own return code so the whole process can
    propagate it. ``log_path`` points at the captured stdout+stderr.
    """

    def __init__(self, step: str, returncode: int, log_path: Path | None = None) -> None:
        super().__init__(f"{step} failed with exit code {returncode}")
        self.step = step
        self.exit_code = returncode
        self.log_path = log_path
