"""
Pytest fixtures: a fake node distribution, fake npm/bower/grunt, and an
httpx mock transport standing in for the resolver and the mirror.
"""

from __future__ import annotations

import io
import json
import os
import tarfile
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from frontend_buildpack.config import Settings
from frontend_buildpack.context import BuildContext

NODE_VERSION = "0.10.30"
RESOLVER_URL = "https://resolver.test/node/resolve"
MIRROR_URL = "https://mirror.test/dist"

# Every fake tool appends "<tool> <args>" to $FAKE_TOOL_LOG.
# FAKE_NPM_FAIL_ON=<subcommand> makes that npm subcommand exit ${FAKE_NPM_EXIT:-1}.
FAKE_NPM = r"""#!/bin/sh
echo "npm $*" >> "$FAKE_TOOL_LOG"
echo "npm $1 output"
if [ "$FAKE_NPM_FAIL_ON" = "$1" ]; then
  echo "npm ERR! $1 failed"
  exit "${FAKE_NPM_EXIT:-1}"
fi
case "$1" in
  install)
    mkdir -p node_modules/left-pad node_modules/grunt-cli/bin node_modules/.bin
    echo "${SECRET_TOKEN:-unset}" > node_modules/.install-env
    printf '#!/bin/sh\necho "grunt $* NODE_ENV=$NODE_ENV" >> "$FAKE_TOOL_LOG"\n' \
      > node_modules/grunt-cli/bin/grunt
    chmod +x node_modules/grunt-cli/bin/grunt
    printf '#!/bin/sh\necho "bower $*" >> "$FAKE_TOOL_LOG"\nif [ "$1" = install ]; then mkdir -p bower_components/jquery; fi\nif [ "$1" = prune ]; then rm -rf bower_components/stale-*; fi\n' \
      > node_modules/.bin/bower
    chmod +x node_modules/.bin/bower
    mkdir -p .npm .node-gyp
    ;;
  prune)
    rm -rf node_modules/stale-*
    ;;
esac
exit 0
"""

FAKE_NODE = "#!/bin/sh\necho v" + NODE_VERSION + "\n"


def _make_node_tarball(root: Path, version: str) -> bytes:
    dist = root / f"node-v{version}-linux-x64"
    bin_dir = dist / "bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "node").write_text(FAKE_NODE, encoding="utf-8")
    (bin_dir / "npm").write_text(FAKE_NPM, encoding="utf-8")
    for f in bin_dir.iterdir():
        f.chmod(0o755)
    os.symlink("npm", bin_dir / "npx")
    (dist / "README.md").write_text("fake node\n", encoding="utf-8")

    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        tar.add(dist, arcname=dist.name)
    return buf.getvalue()


@pytest.fixture
def node_tarball(tmp_path) -> bytes:
    return _make_node_tarball(tmp_path / "dist-src", NODE_VERSION)


@pytest.fixture
def tool_log(tmp_path, monkeypatch) -> Path:
    """File every fake tool appends its invocation to."""
    path = tmp_path / "tools.log"
    path.write_text("", encoding="utf-8")
    monkeypatch.setenv("FAKE_TOOL_LOG", str(path))
    monkeypatch.delenv("FAKE_NPM_FAIL_ON", raising=False)
    monkeypatch.delenv("FAKE_NPM_EXIT", raising=False)
    monkeypatch.delenv("SECRET_TOKEN", raising=False)
    return path


class FakeNetwork:
    """Records resolver queries and serves the fake distribution."""

    def __init__(self, tarball: bytes, version: str = NODE_VERSION) -> None:
        self.tarball = tarball
        self.version = version
        self.ranges: list[str | None] = []
        self.shasums: str | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url.startswith(RESOLVER_URL):
            self.ranges.append(request.url.params.get("range"))
            return httpx.Response(200, text=self.version + "\n")
        if url.endswith(".tar.gz"):
            return httpx.Response(200, content=self.tarball)
        if url.endswith("SHASUMS256.txt") and self.shasums is not None:
            return httpx.Response(200, text=self.shasums)
        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def network(node_tarball) -> FakeNetwork:
    return FakeNetwork(node_tarball)


@pytest.fixture
def settings() -> Settings:
    return Settings(resolver_url=RESOLVER_URL, mirror_url=MIRROR_URL)


@pytest.fixture
def make_app(tmp_path) -> Callable[..., Path]:
    """Create a build dir with a package.json (and optional extra files)."""

    def _make(engines: dict | None = None, files: dict[str, str] | None = None) -> Path:
        build = tmp_path / "build"
        build.mkdir(exist_ok=True)
        pkg: dict = {"name": "frontend", "version": "1.0.0"}
        if engines is not None:
            pkg["engines"] = engines
        (build / "package.json").write_text(json.dumps(pkg), encoding="utf-8")
        for name, content in (files or {}).items():
            (build / name).write_text(content, encoding="utf-8")
        return build

    return _make


@pytest.fixture
def make_ctx(tmp_path, settings) -> Callable[..., BuildContext]:
    def _make(build: Path, env: dict[str, str] | None = None) -> BuildContext:
        env_dir = None
        if env is not None:
            env_dir = tmp_path / "env"
            env_dir.mkdir(exist_ok=True)
            for k, v in env.items():
                (env_dir / k).write_text(v, encoding="utf-8")
        return BuildContext(
            build_dir=build, cache_dir=tmp_path / "cache", env_dir=env_dir, settings=settings
        )

    return _make
