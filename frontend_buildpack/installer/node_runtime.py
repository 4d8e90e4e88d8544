"""Node runtime installation into ``<build>/vendor/node``.

Downloads the release tarball from the distribution mirror, checks it
against the mirror's ``SHASUMS256.txt`` when one is published, extracts it
in a staging directory and moves it into place.
"""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from pathlib import Path

import httpx

from frontend_buildpack.config import Settings
from frontend_buildpack.errors import DownloadError
from frontend_buildpack.logging import get_logger
from frontend_buildpack.security.archive import safe_extract_tar
from frontend_buildpack.signing.checks import digest_from_shasums, verify_sha256

log = get_logger(__name__)

DOWNLOAD_TIMEOUT = 300
VENDOR_NODE = Path("vendor") / "node"


def node_home(build_dir: Path) -> Path:
    return build_dir / VENDOR_NODE


def node_bin(build_dir: Path) -> Path:
    return node_home(build_dir) / "bin"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _download(client: httpx.Client, url: str, dest_dir: Path) -> Path:
    fd, name = tempfile.mkstemp(prefix="node-download-", suffix=".tar.gz", dir=dest_dir)
    tmpf = Path(name)
    try:
        with os.fdopen(fd, "wb") as out, client.stream("GET", url) as r:
            r.raise_for_status()
            for chunk in r.iter_bytes():
                out.write(chunk)
    except httpx.HTTPError as exc:
        tmpf.unlink(missing_ok=True)
        raise DownloadError(f"Unable to download {url}: {exc}") from exc
    return tmpf


def _maybe_fetch_remote_digest(client: httpx.Client, url: str, filename: str) -> str | None:
    # Best-effort: mirrors without SHASUMS256.txt are accepted unverified
    try:
        resp = client.get(url)
    except httpx.HTTPError as exc:
        log.info("could not fetch %s: %s", url, exc)
        return None
    if resp.status_code != 200:
        log.info("no checksum list at %s (HTTP %s)", url, resp.status_code)
        return None
    return digest_from_shasums(resp.text, filename)


def _make_executable(bin_dir: Path) -> None:
    if not bin_dir.is_dir():
        return
    for entry in bin_dir.iterdir():
        if entry.is_symlink():
            continue
        mode = entry.stat().st_mode
        entry.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def install_node(
    version: str,
    build_dir: Path,
    settings: Settings,
    *,
    client: httpx.Client | None = None,
) -> Path:
    """Install node *version* under *build_dir* and return its ``bin`` dir."""
    url = settings.tarball_url(version)
    tarball_name = settings.tarball_name(version)
    build_dir.mkdir(parents=True, exist_ok=True)

    own_client = client is None
    http = client or httpx.Client(timeout=DOWNLOAD_TIMEOUT, follow_redirects=True)
    staging = Path(tempfile.mkdtemp(prefix=".node-staging-", dir=build_dir))
    try:
        log.info("downloading %s", url)
        archive = _download(http, url, staging)

        if settings.verify_checksums:
            expected = _maybe_fetch_remote_digest(
                http, settings.shasums_url(version), f"{tarball_name}.tar.gz"
            )
            if expected:
                verify_sha256(archive, expected=expected)
                log.info("verified sha256 of %s.tar.gz", tarball_name)

        extract_root = staging / "extract"
        tops = safe_extract_tar(archive, extract_root)
        extracted = extract_root / tarball_name
        if not extracted.is_dir():
            if len(tops) != 1 or not (extract_root / tops[0]).is_dir():
                raise DownloadError(f"Unexpected layout in {url}: {tops}")
            extracted = extract_root / tops[0]

        home = node_home(build_dir)
        if home.exists():
            shutil.rmtree(home)
        home.parent.mkdir(parents=True, exist_ok=True)
        os.replace(extracted, home)
    finally:
        shutil.rmtree(staging, ignore_errors=True)
        if own_client:
            http.close()

    bin_dir = node_bin(build_dir)
    _make_executable(bin_dir)
    return bin_dir
