"""npm dependency handling: cache restore, prune, rebuild and install."""

from __future__ import annotations

from collections.abc import Mapping

from frontend_buildpack import cache, output
from frontend_buildpack.context import BuildContext


def prepare_node_modules(ctx: BuildContext, node_version: str) -> tuple[bool, bool]:
    """Bring ``node_modules`` up to date before ``npm install``.

    Returns ``(restored_from_cache, rebuilt)``.
    """
    # Committed node_modules wins over the cache, but native addons were
    # compiled elsewhere
    if ctx.node_modules.is_dir():
        output.status("Found existing node_modules directory; skipping cache")
        output.status("Rebuilding any native dependencies")
        ctx.run("npm rebuild", ["npm", "rebuild"])
        return False, True

    cached = cache.cached_node_modules(ctx.cache_dir)
    if not cached.is_dir():
        return False, False

    output.status("Restoring node_modules directory from cache")
    cache.restore(cached, ctx.node_modules)

    output.status("Pruning cached dependencies not specified in package.json")
    ctx.run("npm prune", ["npm", "prune"])

    previous = cache.cached_node_version(ctx.cache_dir)
    if previous is not None and previous != node_version:
        output.status("Node version changed since last build; rebuilding dependencies")
        ctx.run("npm rebuild", ["npm", "rebuild"])
        return True, True
    return True, False


def install_dependencies(ctx: BuildContext, config_vars: Mapping[str, str]) -> None:
    output.status("Installing dependencies")
    ctx.run(
        "npm install",
        ["npm", "install", "--userconfig", str(ctx.build_dir / ".npmrc")],
        extra_env=config_vars,
    )
