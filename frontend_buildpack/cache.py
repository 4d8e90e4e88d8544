"""Build cache layout and bookkeeping.

Layout under the cache dir::

    node/node_modules           npm dependencies of the last build
    node/.heroku/node-version   node version they were built against
    bower/bower_components      bower dependencies of the last build

The cache is purged and rewritten on every build; nothing is merged.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from frontend_buildpack.context import STATE_DIRNAME, VERSION_FILENAME
from frontend_buildpack.logging import get_logger

log = get_logger(__name__)

NODE_CACHE = "node"
BOWER_CACHE = "bower"
# Apps built before the per-ecosystem layout cached node_modules at the top level
LEGACY_NODE_MODULES = "node_modules"


def cached_node_modules(cache_dir: Path) -> Path:
    return cache_dir / NODE_CACHE / "node_modules"


def cached_bower_components(cache_dir: Path) -> Path:
    return cache_dir / BOWER_CACHE / "bower_components"


def cached_node_version(cache_dir: Path) -> str | None:
    marker = cache_dir / NODE_CACHE / STATE_DIRNAME / VERSION_FILENAME
    if not marker.is_file():
        return None
    return marker.read_text(encoding="utf-8").strip() or None


def restore(src: Path, dest: Path) -> None:
    log.info("restoring %s -> %s", src, dest)
    shutil.copytree(src, dest, symlinks=True)


def _remove(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def purge(cache_dir: Path) -> None:
    """Drop node and bower cache content, leaving the rest of the cache dir alone."""
    for name in (LEGACY_NODE_MODULES, NODE_CACHE, BOWER_CACHE):
        _remove(cache_dir / name)


def save(build_dir: Path, cache_dir: Path) -> list[str]:
    """Replace the cache with this build's dependency snapshots.

    Returns the build-relative names of what was cached.
    """
    purge(cache_dir)
    node_cache = cache_dir / NODE_CACHE
    node_cache.mkdir(parents=True, exist_ok=True)

    saved: list[str] = []
    if (build_dir / "node_modules").is_dir():
        shutil.copytree(build_dir / "node_modules", node_cache / "node_modules", symlinks=True)
        saved.append("node_modules")
    if (build_dir / "bower_components").is_dir():
        bower_cache = cache_dir / BOWER_CACHE
        bower_cache.mkdir(parents=True, exist_ok=True)
        shutil.copytree(
            build_dir / "bower_components", bower_cache / "bower_components", symlinks=True
        )
        saved.append("bower_components")
    state = build_dir / STATE_DIRNAME
    if state.is_dir():
        shutil.copytree(state, node_cache / STATE_DIRNAME, symlinks=True)
        saved.append(STATE_DIRNAME)
    log.info("cached %s", ", ".join(saved) or "nothing")
    return saved
