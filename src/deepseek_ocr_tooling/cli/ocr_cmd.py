"""`deepseek-ocr-tooling run-android-cli` and `run-cli` — cargo run the OCR programs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from deepseek_ocr_tooling.cli.parse_common import path_resolver
from deepseek_ocr_tooling.ocr_cli.presets import (
    DEFAULT_DEVICE,
    DEFAULT_MAX_NEW_TOKENS,
    MODEL_DIRS,
    resolve_models_dir,
)
from deepseek_ocr_tooling.ocr_cli.runner import read_prompt, run_android_cli, run_desktop_cli


def _add_common(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--prompt", default=None, help="Prompt text")
    ap.add_argument("--prompt-file", type=Path, default=None, help="Read the prompt from a file")
    ap.add_argument(
        "--image",
        dest="images",
        action="append",
        default=[],
        help="Image input (repeatable)",
    )
    ap.add_argument(
        "--project-root",
        type=path_resolver,
        default=Path.cwd(),
        help="Cargo workspace root (default: cwd)",
    )


def _prompt_or_exit(args: argparse.Namespace) -> str | None:
    try:
        return read_prompt(args.prompt, args.prompt_file)
    except OSError as e:
        print(f"❌ failed to load prompt file at {args.prompt_file}: {e}", file=sys.stderr)
        sys.exit(1)


def run_android_cli_argv(argv: list[str] | None = None) -> None:
    """Parse argv and run android-cli through cargo. Exits with cargo's status."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    ap = argparse.ArgumentParser(
        prog="deepseek-ocr-tooling run-android-cli",
        description="Run the Android OCR engine on a desktop host (cargo run --bin android-cli)",
    )
    ap.add_argument("--model-kind", choices=sorted(MODEL_DIRS), default="deepseek")
    ap.add_argument(
        "--models-dir",
        default=None,
        help="Model cache root (env DEEPSEEK_OCR_MODELS_DIR, default: ~/Library/Caches/deepseek-ocr/models)",
    )
    ap.add_argument("--max-new-tokens", type=int, default=None)
    _add_common(ap)
    args = ap.parse_args(argv)

    rc = run_android_cli(
        args.model_kind,
        resolve_models_dir(args.models_dir),
        _prompt_or_exit(args),
        args.images,
        args.project_root,
        max_new_tokens=args.max_new_tokens,
    )
    sys.exit(rc)


def run_cli_argv(argv: list[str] | None = None) -> None:
    """Parse argv and run deepseek-ocr-cli through cargo. Exits with cargo's status."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    ap = argparse.ArgumentParser(
        prog="deepseek-ocr-tooling run-cli",
        description="Run deepseek-ocr-cli (cargo run -p deepseek-ocr-cli)",
    )
    ap.add_argument("--model", default=None, help="Model id, e.g. paddleocr-vl")
    ap.add_argument("--device", default=DEFAULT_DEVICE, help="cpu, metal, cuda, ...")
    ap.add_argument("--dtype", default=None, help="e.g. f16")
    ap.add_argument("--max-new-tokens", type=int, default=DEFAULT_MAX_NEW_TOKENS)
    ap.add_argument(
        "--features",
        default=None,
        help="Comma-separated cargo features (default: metal when --device metal)",
    )
    _add_common(ap)
    args = ap.parse_args(argv)

    features = None
    if args.features is not None:
        features = [f for f in args.features.split(",") if f]
    rc = run_desktop_cli(
        _prompt_or_exit(args),
        args.images,
        args.project_root,
        model=args.model,
        device=args.device,
        dtype=args.dtype,
        max_new_tokens=args.max_new_tokens,
        features=features,
    )
    sys.exit(rc)
