"""Detection API: what the build tree contains before anything is installed."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field

from frontend_buildpack.types import PackageManifest


class DetectReport(BaseModel):
    """Normalized detection result.

    Attributes
    ----------
    has_package_json: bool
        Whether the build dir is a Node project at all.
    manifest: PackageManifest
        Parsed ``package.json`` (empty when missing).
    semver_range: str | None
        Raw ``engines.node`` value, ``None`` when absent or null.
    gruntfile: str | None
        Name of the grunt configuration file, when one exists.
    has_bower: bool
        ``bower.json`` present.
    has_node_modules / has_bower_components: bool
        Dependency directories committed to source control.
    notes: list[str]
        Free-form observations from detectors.
    """

    has_package_json: bool = False
    manifest: PackageManifest = Field(default_factory=PackageManifest)
    semver_range: str | None = None
    gruntfile: str | None = None
    has_bower: bool = False
    has_node_modules: bool = False
    has_bower_components: bool = False
    notes: list[str] = []


class Detector(Protocol):
    def detect(self, root: Path) -> DetectReport: ...


def detect_project(root: Path) -> DetectReport:
    """Run the Node detector over *root*."""
    from .node_pkg import detect as detect_node

    return detect_node(root)
