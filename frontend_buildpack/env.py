"""Config vars from the platform's env dir, scoped to a single step.

The env dir holds one file per variable: the file name is the variable name
and the file content is its value. Nothing here touches ``os.environ``;
callers get a fresh mapping to hand to a subprocess.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

from frontend_buildpack.logging import get_logger

log = get_logger(__name__)


def load_env_dir(env_dir: Path | None, whitelist: str = "", blacklist: str = "") -> dict[str, str]:
    """Read *env_dir* into a dict, filtered by the whitelist/blacklist regexes.

    An empty whitelist admits every name; an empty blacklist rejects none.
    """
    if env_dir is None or not env_dir.is_dir():
        return {}
    allow = re.compile(whitelist) if whitelist else None
    deny = re.compile(blacklist) if blacklist else None

    values: dict[str, str] = {}
    for entry in sorted(env_dir.iterdir()):
        name = entry.name
        if name.startswith(".") or not entry.is_file():
            continue
        if allow is not None and not allow.search(name):
            continue
        if deny is not None and deny.search(name):
            log.debug("skipping blacklisted config var %s", name)
            continue
        # Values are arbitrary bytes; surrogateescape hands them to subprocesses unchanged
        values[name] = entry.read_text(encoding="utf-8", errors="surrogateescape").rstrip("\n")
    return values


def command_env(
    path_prefix: list[Path] | None = None,
    extra: Mapping[str, str] | None = None,
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build a subprocess environment: *base* (default ``os.environ``) plus *extra*,
    with *path_prefix* directories placed first on ``PATH``."""
    env = dict(os.environ if base is None else base)
    if extra:
        env.update(extra)
    if path_prefix:
        parts = [str(p) for p in path_prefix]
        if env.get("PATH"):
            parts.append(env["PATH"])
        env["PATH"] = os.pathsep.join(parts)
    return env
