"""Safe archive extraction helpers.

Guards against common archive attacks:
- Tar Slip (../ traversal)
- Absolute paths
- Symlink and hardlink escapes
- Device nodes and FIFOs
- Oversized files (basic cap)
"""

from __future__ import annotations

import posixpath
import tarfile
from pathlib import Path

from frontend_buildpack.errors import DownloadError

MAX_MEMBER_BYTES = 512 * 1024 * 1024  # 512 MiB per member


def _is_within(base: Path, target: Path) -> bool:
    try:
        target.relative_to(base)
        return True
    except ValueError:
        return False


def _check_member(base: Path, m: tarfile.TarInfo) -> None:
    fn = Path(m.name)
    if fn.is_absolute() or ".." in fn.parts:
        raise DownloadError(f"Unsafe member path: {m.name}")
    target = (base / fn).resolve()
    if not _is_within(base, target):
        raise DownloadError(f"Member escapes destination: {m.name}")
    if m.issym() or m.islnk():
        if posixpath.isabs(m.linkname):
            raise DownloadError(f"Absolute link target: {m.name} -> {m.linkname}")
        # Symlinks resolve relative to their own directory, hardlinks to the root
        anchor = target.parent if m.issym() else base
        link_target = (anchor / m.linkname).resolve()
        if not _is_within(base, link_target):
            raise DownloadError(f"Link escapes destination: {m.name} -> {m.linkname}")
    elif not (m.isfile() or m.isdir()):
        raise DownloadError(f"Unsupported member type: {m.name}")
    if m.size > MAX_MEMBER_BYTES:
        raise DownloadError(f"Member too large: {m.name} ({m.size} bytes)")


def safe_extract_tar(tar_path: Path, dest: Path) -> list[str]:
    """Extract a (gzipped) tarball into *dest* after vetting every member.

    Returns the top-level entry names found in the archive.
    """
    dest.mkdir(parents=True, exist_ok=True)
    base = dest.resolve()
    try:
        with tarfile.open(tar_path, mode="r:*") as tar:
            members = tar.getmembers()
            for m in members:
                _check_member(base, m)
            tar.extractall(base, members=members, filter="tar")
    except tarfile.TarError as exc:
        raise DownloadError(f"Corrupt archive {tar_path}: {exc}") from exc
    return sorted({Path(m.name).parts[0] for m in members if Path(m.name).parts})
