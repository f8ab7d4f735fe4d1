"""Detect the Android cross-compilation helper (cargo-ndk) on PATH."""

from __future__ import annotations

import shutil

CARGO_NDK = "cargo-ndk"


def has_cargo_ndk() -> bool:
    """True if cargo-ndk is on PATH. Pure query; the orchestrator calls it once per run."""
    return shutil.which(CARGO_NDK) is not None
