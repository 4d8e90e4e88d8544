"""External command execution with captured output.

Each step's stdout and stderr go to ``<build>/.buildpack-logs/<step>.log``.
The log is removed when the command succeeds and kept (and reported through
``CommandFailed``) when it does not.
"""

from __future__ import annotations

import re
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from frontend_buildpack.errors import CommandFailed
from frontend_buildpack.logging import get_logger

log = get_logger(__name__)

LOG_DIRNAME = ".buildpack-logs"

# Shell convention for "command not found"
EXIT_NOT_FOUND = 127


def log_dir(build_dir: Path) -> Path:
    return build_dir / LOG_DIRNAME


def _slug(step: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "-", step).strip("-") or "command"


def run_logged(
    step: str,
    cmd: Sequence[str],
    *,
    cwd: Path,
    env: Mapping[str, str],
    logs: Path,
) -> None:
    """Run *cmd*; raise CommandFailed carrying its exit code on failure."""
    logs.mkdir(parents=True, exist_ok=True)
    log_path = logs / f"{_slug(step)}.log"
    log.debug("running %s", " ".join(cmd), extra={"step": step})

    executable = shutil.which(cmd[0], path=env.get("PATH"))
    with open(log_path, "wb") as out:
        if executable is None:
            out.write(f"{cmd[0]}: command not found\n".encode())
            returncode = EXIT_NOT_FOUND
        else:
            proc = subprocess.run(
                [executable, *cmd[1:]],
                cwd=cwd,
                env=dict(env),
                stdin=subprocess.DEVNULL,
                stdout=out,
                stderr=subprocess.STDOUT,
                check=False,
            )
            returncode = proc.returncode
            if returncode < 0:
                # Killed by a signal; report it the way a shell would
                returncode = 128 - returncode

    if returncode != 0:
        log.info("%s exited with %s", step, returncode, extra={"step": step})
        raise CommandFailed(step, returncode, log_path)
    log_path.unlink(missing_ok=True)


def cleanup_logs(build_dir: Path) -> None:
    d = log_dir(build_dir)
    if d.is_dir() and not any(d.iterdir()):
        d.rmdir()
