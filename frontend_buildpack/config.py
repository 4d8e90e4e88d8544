"""Buildpack settings, read from the process environment.

Every knob has a module-level default so a bare ``Settings()`` behaves like
a stock build. ``Settings.from_env()`` layers ``BUILDPACK_*`` variables on
top.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel

DEFAULT_RESOLVER_URL = "https://semver.io/node/resolve"
DEFAULT_MIRROR_URL = "https://nodejs.org/dist"
DEFAULT_PLATFORM = "linux-x64"
DEFAULT_ENV_BLACKLIST = r"^(PATH|GIT_DIR|CPATH|CPPATH|LD_PRELOAD|LIBRARY_PATH)$"

# Settings field -> environment variable
ENV_VARS = {
    "resolver_url": "BUILDPACK_NODE_RESOLVER_URL",
    "mirror_url": "BUILDPACK_NODE_MIRROR_URL",
    "platform": "BUILDPACK_NODE_PLATFORM",
    "log_level": "BUILDPACK_LOG_LEVEL",
    "env_whitelist": "BUILDPACK_ENV_WHITELIST",
    "env_blacklist": "BUILDPACK_ENV_BLACKLIST",
    "verify_checksums": "BUILDPACK_VERIFY_CHECKSUMS",
    "node_env": "NODE_ENV",
}
_FALSY = {"0", "false", "no", "off", ""}


class Settings(BaseModel):
    resolver_url: str = DEFAULT_RESOLVER_URL
    mirror_url: str = DEFAULT_MIRROR_URL
    platform: str = DEFAULT_PLATFORM
    verify_checksums: bool = True
    env_whitelist: str = ""
    env_blacklist: str = DEFAULT_ENV_BLACKLIST
    log_level: str = "WARNING"
    node_env: str = "production"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for field in ("resolver_url", "mirror_url", "platform", "log_level", "node_env"):
            if env.get(ENV_VARS[field]):
                values[field] = env[ENV_VARS[field]]
        # An explicitly empty pattern is meaningful for these two
        for field in ("env_whitelist", "env_blacklist"):
            if ENV_VARS[field] in env:
                values[field] = env[ENV_VARS[field]]
        verify = env.get(ENV_VARS["verify_checksums"])
        if verify is not None:
            values["verify_checksums"] = verify.strip().lower() not in _FALSY
        return cls(**values)

    def tarball_name(self, version: str) -> str:
        return f"node-v{version}-{self.platform}"

    def tarball_url(self, version: str) -> str:
        base = self.mirror_url.rstrip("/")
        return f"{base}/v{version}/{self.tarball_name(version)}.tar.gz"

    def shasums_url(self, version: str) -> str:
        return f"{self.mirror_url.rstrip('/')}/v{version}/SHASUMS256.txt"
