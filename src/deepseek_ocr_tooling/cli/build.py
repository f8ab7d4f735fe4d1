"""`deepseek-ocr-tooling build-android` — cargo-ndk/cargo build, locate the .so, UniFFI bindings."""

import logging
import sys
from pathlib import Path

from deepseek_ocr_tooling.build.android import run as run_build_android
from deepseek_ocr_tooling.build.config import load_build_config_file, resolve_build_config
from deepseek_ocr_tooling.cli.parse_common import path_resolver


def run_build_android_argv(argv: list[str] | None = None) -> None:
    """Parse argv, resolve config (defaults < --config < env < flags), build. Exits with the build's status."""
    import argparse

    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'deepseek-ocr-tooling build-android'
    ap = argparse.ArgumentParser(
        prog="deepseek-ocr-tooling build-android",
        description="Build the deepseek-ocr-android shared library (cargo-ndk or cargo --target)",
    )
    ap.add_argument("--config", type=path_resolver, default=None, help="YAML build settings")
    ap.add_argument("--target", default=None, help="Rust target triple (env TARGET)")
    ap.add_argument("--abi", default=None, help="Android ABI for cargo-ndk (env ABI)")
    ap.add_argument("--profile", default=None, help="Cargo profile (env PROFILE)")
    ap.add_argument("--out-dir", default=None, help="cargo-ndk output directory (env OUT_DIR)")
    ap.add_argument(
        "--cargo-target-dir",
        default=None,
        help="cargo target directory (env CARGO_TARGET_DIR, default: target)",
    )
    ap.add_argument(
        "--uniffi-bindgen-bin",
        default=None,
        help="uniffi-bindgen executable (env UNIFFI_BINDGEN_BIN)",
    )
    ap.add_argument(
        "--uniffi-output-root",
        default=None,
        help="Bindings output root (env UNIFFI_OUTPUT_ROOT)",
    )
    ap.add_argument(
        "--project-root",
        type=path_resolver,
        default=Path.cwd(),
        help="Project root (default: cwd)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    file_values: dict[str, str] = {}
    if args.config is not None:
        if not args.config.is_file():
            print(f"❌ Config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        try:
            file_values = load_build_config_file(args.config)
        except ValueError as e:
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)

    config = resolve_build_config(
        file_values=file_values,
        overrides=vars(args),
        project_root=args.project_root,
    )
    sys.exit(run_build_android(config))
