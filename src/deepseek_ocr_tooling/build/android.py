"""Build the deepseek-ocr-android shared library and (optionally) its Kotlin bindings.

Steps, each gating the next:
1. pick cargo-ndk or plain cargo (checked once)
2. build; a failing cargo/rustup exit status is returned as-is
3. locate lib*.so: strategy candidates, then a recursive search of the cargo target dir
   (and out_dir when it lives elsewhere); not found -> 1
4. uniffi-bindgen generate, skipped with a warning when the generator is missing
"""

from __future__ import annotations

import sys
from pathlib import Path

from deepseek_ocr_tooling.build.artifact import find_artifact
from deepseek_ocr_tooling.build.bindings import generate_bindings
from deepseek_ocr_tooling.build.config import PREFIX, AndroidBuildConfig
from deepseek_ocr_tooling.build.strategy import BuildStrategy, select_strategy
from deepseek_ocr_tooling.build.toolchain import has_cargo_ndk
from deepseek_ocr_tooling.helpers import is_relative_to


def search_roots(config: AndroidBuildConfig) -> list[Path]:
    """Recursive search roots: the cargo target dir, plus out_dir if it is outside it."""
    roots = [config.cargo_target_path]
    if not is_relative_to(config.out_path, config.cargo_target_path):
        roots.append(config.out_path)
    return roots


def locate_artifact(config: AndroidBuildConfig, strategy: BuildStrategy) -> Path | None:
    return find_artifact(strategy.candidates(), search_roots(config), config.artifact_name)


def run(config: AndroidBuildConfig) -> int:
    """Build, locate, generate bindings. Returns 0, 1 (artifact not found), or a failing tool's status."""
    strategy = select_strategy(config, has_cargo_ndk())
    rc = strategy.build()
    if rc != 0:
        return rc

    artifact = locate_artifact(config, strategy)
    if artifact is None:
        expected = strategy.candidates()[0]
        print(
            f"{PREFIX} ⚠️ Build finished but {config.artifact_name} was not found "
            f"(expected {expected})",
            file=sys.stderr,
        )
        return 1
    print(f"{PREFIX} ✅ Shared library ready at {artifact}")

    return generate_bindings(
        artifact,
        config.uniffi_bindgen_bin,
        config.bindings_path,
        config.project_root,
    )
