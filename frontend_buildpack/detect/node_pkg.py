"""Node package detector.

Heuristics:
- ``package.json`` marks a Node project; ``engines.node`` is the runtime range
- Gruntfile candidates: ``grunt.js``, ``Gruntfile.js``, ``Gruntfile.coffee``
- ``bower.json`` enables the bower install step
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from frontend_buildpack.detect.base import DetectReport
from frontend_buildpack.errors import ManifestError
from frontend_buildpack.types import PackageManifest

GRUNTFILES = ["grunt.js", "Gruntfile.js", "Gruntfile.coffee"]


def read_manifest(root: Path) -> PackageManifest | None:
    pj = root / "package.json"
    if not pj.exists():
        return None
    try:
        data = json.loads(pj.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ManifestError(f"Unable to parse {pj}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{pj} must contain a JSON object")
    try:
        return PackageManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(f"Invalid {pj}: {exc}") from exc


def find_gruntfile(root: Path) -> str | None:
    for name in GRUNTFILES:
        if (root / name).is_file():
            return name
    return None


def detect(root: Path) -> DetectReport:
    manifest = read_manifest(root)
    if manifest is None:
        return DetectReport(notes=["No package.json found"])

    notes: list[str] = ["Detected Node project"]
    gruntfile = find_gruntfile(root)
    if gruntfile:
        notes.append(f"Found {gruntfile}")
    has_bower = (root / "bower.json").is_file()
    if has_bower:
        notes.append("Found bower.json")

    return DetectReport(
        has_package_json=True,
        manifest=manifest,
        semver_range=manifest.engines.node,
        gruntfile=gruntfile,
        has_bower=has_bower,
        has_node_modules=(root / "node_modules").is_dir(),
        has_bower_components=(root / "bower_components").is_dir(),
        notes=notes,
    )
