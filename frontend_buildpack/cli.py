"""frontend-buildpack CLI: the buildpack `compile` and `detect` entry points.

Commands:
- compile BUILD_DIR CACHE_DIR [ENV_DIR]
- detect BUILD_DIR
- resolve [RANGE] (diagnostic)
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich import print as rprint

from frontend_buildpack import output
from frontend_buildpack.config import Settings
from frontend_buildpack.context import BuildContext
from frontend_buildpack.core import compile_pipeline
from frontend_buildpack.detect.base import detect_project
from frontend_buildpack.errors import BuildpackError, CommandFailed
from frontend_buildpack.logging import configure
from frontend_buildpack.resolver import resolve_node_version

app = typer.Typer(add_completion=False, help="Install and cache a Node.js frontend build")


def _settings() -> Settings:
    settings = Settings.from_env()
    configure(settings.log_level)
    return settings


def _fail(exc: BuildpackError) -> typer.Exit:
    if isinstance(exc, CommandFailed):
        if exc.log_path is not None:
            output.dump_log(exc.log_path)
        output.error(f"{exc.step} failed")
    else:
        output.error(str(exc))
    return typer.Exit(code=exc.exit_code)


@app.command("compile")
def compile_(
    build_dir: Path = typer.Argument(..., help="Application build directory"),
    cache_dir: Path = typer.Argument(..., help="Directory persisted across builds"),
    env_dir: Path | None = typer.Argument(None, help="Directory of config var files"),
) -> None:
    ctx = BuildContext(
        build_dir=build_dir.resolve(),
        cache_dir=cache_dir.resolve(),
        env_dir=env_dir.resolve() if env_dir is not None else None,
        settings=_settings(),
    )
    try:
        compile_pipeline(ctx)
    except BuildpackError as exc:
        raise _fail(exc) from exc


@app.command()
def detect(build_dir: Path = typer.Argument(..., help="Application build directory")) -> None:
    try:
        report = detect_project(build_dir)
    except BuildpackError as exc:
        raise _fail(exc) from exc
    if not report.has_package_json:
        print("no")
        raise typer.Exit(code=1)
    print("Node.js")


@app.command()
def resolve(
    semver_range: str = typer.Argument("", help="Semver range, e.g. '0.10.x'"),
) -> None:
    settings = _settings()
    try:
        resolution = resolve_node_version(semver_range or None, settings.resolver_url)
    except BuildpackError as exc:
        raise _fail(exc) from exc
    for advice in resolution.advisories:
        rprint(f"[yellow]{advice}[/yellow]")
    print(resolution.version)


if __name__ == "__main__":
    app()
