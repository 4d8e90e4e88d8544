"""bower dependency handling, mirroring the npm cache policy.

bower has no native addons, so a committed ``bower_components`` directory is
used as is.
"""

from __future__ import annotations

import shutil

from frontend_buildpack import cache, output
from frontend_buildpack.context import BuildContext
from frontend_buildpack.env import command_env


def bower_command(ctx: BuildContext) -> str | None:
    """Locate bower: the app's own copy first, then PATH."""
    local = ctx.node_modules / ".bin" / "bower"
    if local.exists():
        return str(local)
    return shutil.which("bower", path=command_env(path_prefix=[ctx.node_bin])["PATH"])


def install_bower_components(ctx: BuildContext) -> bool | None:
    """Restore, prune and install bower components.

    Returns whether the cache was restored, or ``None`` when bower is not
    available and the step was skipped.
    """
    bower = bower_command(ctx)
    if bower is None:
        output.protip("Found bower.json but no bower; add bower to package.json dependencies")
        return None

    restored = False
    if ctx.bower_components.is_dir():
        output.status("Found existing bower_components directory; skipping cache")
    else:
        cached = cache.cached_bower_components(ctx.cache_dir)
        if cached.is_dir():
            output.status("Restoring bower_components directory from cache")
            cache.restore(cached, ctx.bower_components)
            output.status("Pruning cached bower components not specified in bower.json")
            ctx.run("bower prune", [bower, "prune", "--allow-root"])
            restored = True

    output.status("Installing bower components")
    ctx.run("bower install", [bower, "install", "--allow-root", "--config.interactive=false"])
    return restored
