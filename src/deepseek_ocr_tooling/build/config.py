"""Android build configuration: defaults, optional YAML file, environment, explicit overrides.

Precedence (lowest first): DEFAULT_ANDROID_BUILD, YAML config file, environment, overrides.
Nothing is validated; every value is passed through to cargo/rustup/uniffi-bindgen as-is.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from deepseek_ocr_tooling.helpers import resolve_under, shared_library_filename

CRATE = "deepseek-ocr-android"

PREFIX = "[build-android]"

DEFAULT_ANDROID_BUILD: dict[str, str] = {
    "target": "aarch64-linux-android",
    "abi": "arm64-v8a",
    "profile": "release",
    "out_dir": "target/android",
    "uniffi_bindgen_bin": "uniffi-bindgen",
    "uniffi_output_root": "bindings",
    "cargo_target_dir": "target",
}

# field -> environment variable
ENV_VARS: dict[str, str] = {
    "target": "TARGET",
    "abi": "ABI",
    "profile": "PROFILE",
    "out_dir": "OUT_DIR",
    "uniffi_bindgen_bin": "UNIFFI_BINDGEN_BIN",
    "uniffi_output_root": "UNIFFI_OUTPUT_ROOT",
    "cargo_target_dir": "CARGO_TARGET_DIR",
}


@dataclass(frozen=True)
class AndroidBuildConfig:
    target: str
    abi: str
    profile: str
    out_dir: str
    uniffi_bindgen_bin: str
    uniffi_output_root: str
    cargo_target_dir: str
    project_root: Path = field(default_factory=Path.cwd)
    crate: str = CRATE

    @property
    def artifact_name(self) -> str:
        return shared_library_filename(self.crate)

    @property
    def out_path(self) -> Path:
        """cargo-ndk output directory (absolute, or under project_root)."""
        return resolve_under(self.project_root, self.out_dir)

    @property
    def cargo_target_path(self) -> Path:
        """cargo's per-target output root (absolute, or under project_root)."""
        return resolve_under(self.project_root, self.cargo_target_dir)

    @property
    def bindings_path(self) -> Path:
        """Kotlin bindings output directory: {uniffi_output_root}/kotlin."""
        return resolve_under(self.project_root, self.uniffi_output_root) / "kotlin"


def load_build_config_file(config_path: Path) -> dict[str, str]:
    """Load build settings from YAML. Keys are AndroidBuildConfig field names; unknown keys are ignored."""
    with config_path.open() as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        msg = f"Build config must be a mapping: {config_path}"
        raise ValueError(msg)
    return {k: str(v) for k, v in data.items() if k in DEFAULT_ANDROID_BUILD and v is not None}


def resolve_build_config(
    env: Mapping[str, str] | None = None,
    file_values: Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
    project_root: Path | None = None,
) -> AndroidBuildConfig:
    """Return an AndroidBuildConfig with defaults filled.

    Empty environment values count as unset. Overrides whose value is None are ignored,
    so argparse namespaces can be passed straight through.
    """
    if env is None:
        env = os.environ
    values = dict(DEFAULT_ANDROID_BUILD)
    if file_values:
        values.update({k: str(v) for k, v in file_values.items() if k in values})
    for key, var in ENV_VARS.items():
        v = env.get(var)
        if v:
            values[key] = v
    if overrides:
        values.update({k: str(v) for k, v in overrides.items() if k in values and v is not None})
    return AndroidBuildConfig(project_root=project_root or Path.cwd(), **values)
