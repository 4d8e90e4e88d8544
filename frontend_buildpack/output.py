"""Build output in the buildpack convention.

Status lines start with ``-----> ``, everything nested under them is indented
by seven spaces so the platform's build log lines up.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

console = Console(highlight=False, soft_wrap=True)

INDENT = " " * 7


def status(msg: str) -> None:
    console.print(f"-----> {msg}", markup=False)


def info(msg: str) -> None:
    console.print(f"{INDENT}{msg}", markup=False)


def protip(msg: str) -> None:
    console.print(f"-----> PRO TIP: {msg}", markup=False)


def indent(text: str) -> None:
    for line in text.splitlines():
        info(line)


def dump_log(path: Path) -> None:
    """Echo a captured command log, indented, so the failure is diagnosable."""
    if not path.exists():
        return
    indent(path.read_text(encoding="utf-8", errors="replace"))


def error(msg: str) -> None:
    console.print(f" !     {msg}", style="red", markup=False)
