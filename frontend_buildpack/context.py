"""Per-build state shared by every step of the compile workflow."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from frontend_buildpack.config import Settings
from frontend_buildpack.env import command_env, load_env_dir
from frontend_buildpack.installer.node_runtime import node_bin
from frontend_buildpack.runner import log_dir, run_logged

STATE_DIRNAME = ".heroku"
VERSION_FILENAME = "node-version"


@dataclass
class BuildContext:
    build_dir: Path
    cache_dir: Path
    env_dir: Path | None = None
    settings: Settings = field(default_factory=Settings)

    @property
    def node_modules(self) -> Path:
        return self.build_dir / "node_modules"

    @property
    def bower_components(self) -> Path:
        return self.build_dir / "bower_components"

    @property
    def state_dir(self) -> Path:
        return self.build_dir / STATE_DIRNAME

    @property
    def node_bin(self) -> Path:
        return node_bin(self.build_dir)

    def config_vars(self) -> dict[str, str]:
        return load_env_dir(
            self.env_dir, self.settings.env_whitelist, self.settings.env_blacklist
        )

    def has_config_vars(self) -> bool:
        return self.env_dir is not None and self.env_dir.is_dir()

    def run(
        self,
        step: str,
        cmd: Sequence[str],
        extra_env: Mapping[str, str] | None = None,
    ) -> None:
        """Run *cmd* in the build dir with the vendored node first on PATH."""
        env = command_env(path_prefix=[self.node_bin], extra=extra_env)
        run_logged(step, cmd, cwd=self.build_dir, env=env, logs=log_dir(self.build_dir))
