"""Android build for deepseek-ocr-android (cargo-ndk or cargo --target, artifact lookup, UniFFI bindings)."""

from .android import run as run_build_android
from .artifact import find_artifact
from .bindings import generate_bindings
from .config import (
    CRATE,
    DEFAULT_ANDROID_BUILD,
    AndroidBuildConfig,
    load_build_config_file,
    resolve_build_config,
)
from .strategy import CargoNdkStrategy, CargoTargetStrategy, select_strategy
from .toolchain import has_cargo_ndk

__all__ = [
    "CRATE",
    "DEFAULT_ANDROID_BUILD",
    "AndroidBuildConfig",
    "CargoNdkStrategy",
    "CargoTargetStrategy",
    "find_artifact",
    "generate_bindings",
    "has_cargo_ndk",
    "load_build_config_file",
    "resolve_build_config",
    "run_build_android",
    "select_strategy",
]
