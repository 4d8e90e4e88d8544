"""Integrity helpers: SHA-256 compute & verify, SHASUMS256.txt lookup."""

from __future__ import annotations

import hashlib
from pathlib import Path

from frontend_buildpack.errors import DownloadError


def sha256(path: Path) -> str:
    """Return the hex SHA-256 of *path*."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _normalize_expected(expected: str) -> str:
    exp = expected.strip()
    if exp.startswith("sha256:"):
        exp = exp.split(":", 1)[1]
    return exp.lower()


def verify_sha256(path: Path, expected: str) -> None:
    """Raise DownloadError if *path*'s sha256 does not match *expected*.

    *expected* may be either plain hex or `sha256:<hex>`.
    """
    got = sha256(path)
    exp = _normalize_expected(expected)
    if got.lower() != exp:
        raise DownloadError(f"SHA-256 mismatch for {path.name}: got {got}, expected {exp}")


def digest_from_shasums(text: str, filename: str) -> str | None:
    """Pick *filename*'s digest out of a ``SHASUMS256.txt`` body.

    Lines look like ``<hex>  <filename>``.
    """
    for line in text.splitlines():
        parts = line.split()
        if len(parts) == 2 and parts[1] == filename:
            digest = parts[0].lower()
            if len(digest) == 64 and all(c in "0123456789abcdef" for c in digest):
                return digest
    return None
