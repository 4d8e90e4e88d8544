"""Grunt build task runner."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from frontend_buildpack import output
from frontend_buildpack.context import BuildContext

GRUNT_CLI = Path("node_modules") / "grunt-cli" / "bin" / "grunt"


def run_grunt(ctx: BuildContext, gruntfile: str | None, config_vars: Mapping[str, str]) -> bool:
    """Run ``grunt heroku:<NODE_ENV>`` with the app's grunt-cli, when possible.

    Returns whether grunt ran.
    """
    if gruntfile is None:
        output.status("No Gruntfile (grunt.js, Gruntfile.js, Gruntfile.coffee) found")
        return False

    grunt = ctx.build_dir / GRUNT_CLI
    if not grunt.is_file():
        output.protip("No grunt-cli found; add grunt-cli to package.json dependencies")
        return False

    node_env = config_vars.get("NODE_ENV") or ctx.settings.node_env
    task = f"heroku:{node_env}"
    output.status(f"Found {gruntfile}, running grunt {task} task")
    ctx.run("grunt", [str(grunt), task], extra_env={**config_vars, "NODE_ENV": node_env})
    return True
