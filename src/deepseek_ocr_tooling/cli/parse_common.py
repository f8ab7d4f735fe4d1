"""Shared CLI argument helpers (--project-root, --config, --models-dir, etc.)."""

from __future__ import annotations

from pathlib import Path


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --project-root, --config)."""
    return Path(s).expanduser().resolve()
