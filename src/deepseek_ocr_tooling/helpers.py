"""Shared helpers for deepseek_ocr_tooling (naming, cargo flags, path search, subprocess).

Used by build, ocr_cli, and the cli modules.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

# --- Naming ---


def crate_lib_name(crate: str) -> str:
    """Cargo library name for a package: dashes become underscores (deepseek-ocr-android -> deepseek_ocr_android)."""
    return crate.replace("-", "_")


def shared_library_filename(crate: str) -> str:
    """Filename of the cdylib cargo emits for an Android/Linux target: lib{crate_lib_name}.so."""
    return f"lib{crate_lib_name(crate)}.so"


# --- Cargo ---


def cargo_profile_flags(profile: str) -> list[str]:
    """--release for the release profile, --profile <name> for anything else (passed verbatim)."""
    if profile == "release":
        return ["--release"]
    return ["--profile", profile]


# --- Path ---


def resolve_under(root: Path, p: str | Path) -> Path:
    """Return p unchanged if absolute, else root / p."""
    path = Path(p)
    return path if path.is_absolute() else root / path


def iter_named_files(root: Path, name: str) -> Iterator[Path]:
    """Yield files called name anywhere under root (rglob order). Yields nothing if root is missing."""
    if not root.is_dir():
        return
    for p in root.rglob(name):
        if p.is_file():
            yield p


def is_relative_to(path: Path, other: Path) -> bool:
    """True if path lies under other (both compared resolved)."""
    try:
        path.resolve().relative_to(other.resolve())
    except ValueError:
        return False
    return True


# --- Subprocess ---


def run_command(cmd: Sequence[str], cwd: Path, env: Mapping[str, str] | None = None) -> int:
    """Run cmd in cwd with inherited stdio; return its exit status (1 if it cannot be started).

    env, when given, is layered over os.environ.
    """
    log.debug("running %s (cwd=%s)", " ".join(cmd), cwd)
    kwargs: dict[str, Any] = {"cwd": str(cwd)}
    if env:
        log.debug("extra env: %s", dict(env))
        kwargs["env"] = {**os.environ, **env}
    try:
        r = subprocess.run(list(cmd), **kwargs)
    except OSError as e:
        print(f"❌ Could not run {cmd[0]}: {e}", file=sys.stderr)
        return 1
    return r.returncode
