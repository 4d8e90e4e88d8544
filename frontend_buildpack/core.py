"""Compile orchestration: resolve → install node → dependencies → cache → grunt."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field

import httpx

from frontend_buildpack import cache, output
from frontend_buildpack.context import VERSION_FILENAME, BuildContext
from frontend_buildpack.detect.base import DetectReport, detect_project
from frontend_buildpack.errors import ManifestError
from frontend_buildpack.installer.bower import install_bower_components
from frontend_buildpack.installer.node_runtime import install_node
from frontend_buildpack.installer.npm import install_dependencies, prepare_node_modules
from frontend_buildpack.logging import get_logger
from frontend_buildpack.resolver import resolve_node_version
from frontend_buildpack.runner import cleanup_logs
from frontend_buildpack.tasks import run_grunt

log = get_logger(__name__)

PROFILE_SCRIPT = (
    'export PATH="$HOME/vendor/node/bin:$HOME/bin:$HOME/node_modules/.bin:$PATH";\n'
)
TRANSIENT_DIRS = (".node-gyp", ".npm")


@dataclass
class CompileResult:
    node_version: str
    node_rebuilt: bool = False
    cache_restored: list[str] = field(default_factory=list)
    cached: list[str] = field(default_factory=list)
    grunt_ran: bool = False


def _report_resolution(requested: str, version: str) -> None:
    if requested == "":
        output.status(f"Defaulting to latest stable node: {version}")
    else:
        output.status(f"Requested node range:  {requested}")
        output.status(f"Resolved node version: {version}")


def _write_version(ctx: BuildContext, version: str) -> None:
    ctx.state_dir.mkdir(parents=True, exist_ok=True)
    (ctx.state_dir / VERSION_FILENAME).write_text(version + "\n", encoding="utf-8")


def _write_profile(ctx: BuildContext) -> None:
    profile_d = ctx.build_dir / ".profile.d"
    profile_d.mkdir(parents=True, exist_ok=True)
    (profile_d / "nodejs.sh").write_text(PROFILE_SCRIPT, encoding="utf-8")


def compile_pipeline(ctx: BuildContext, *, client: httpx.Client | None = None) -> CompileResult:
    """Run the whole compile step. Raises BuildpackError subclasses on failure."""
    ctx.cache_dir.mkdir(parents=True, exist_ok=True)

    report: DetectReport = detect_project(ctx.build_dir)
    if not report.has_package_json:
        raise ManifestError(f"No package.json found in {ctx.build_dir}")

    resolution = resolve_node_version(
        report.semver_range, ctx.settings.resolver_url, client=client
    )
    for advice in resolution.advisories:
        output.protip(advice)
    _report_resolution(resolution.effective_range, resolution.version)
    version = resolution.version

    output.status("Downloading and installing node")
    install_node(version, ctx.build_dir, ctx.settings, client=client)

    result = CompileResult(node_version=version)

    restored, rebuilt = prepare_node_modules(ctx, version)
    result.node_rebuilt = rebuilt
    if restored:
        result.cache_restored.append("node_modules")

    # Config vars are handed to the install step only, never exported globally
    config_vars: dict[str, str] = {}
    if ctx.has_config_vars():
        output.status("Exporting config vars to environment")
        config_vars = ctx.config_vars()
    install_dependencies(ctx, config_vars)

    if report.has_bower:
        if install_bower_components(ctx):
            result.cache_restored.append("bower_components")

    _write_version(ctx, version)

    if ctx.node_modules.is_dir():
        output.status("Caching node_modules directory for future builds")
    result.cached = cache.save(ctx.build_dir, ctx.cache_dir)

    output.status("Cleaning up node-gyp and npm artifacts")
    for name in TRANSIENT_DIRS:
        shutil.rmtree(ctx.build_dir / name, ignore_errors=True)

    output.status("Building runtime environment")
    _write_profile(ctx)

    if report.gruntfile and ctx.has_config_vars():
        output.status("Exporting config vars to environment")
    result.grunt_ran = run_grunt(ctx, report.gruntfile, config_vars)

    cleanup_logs(ctx.build_dir)
    log.info("compile finished for node %s", version)
    return result
