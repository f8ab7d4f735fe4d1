"""Run the OCR programs through cargo run (android-cli on a desktop host, or deepseek-ocr-cli).

Only composes and runs the command; model files and images are checked by the program itself.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from deepseek_ocr_tooling.helpers import run_command
from deepseek_ocr_tooling.ocr_cli.presets import (
    ANDROID_CLI_BIN,
    ANDROID_CLI_PACKAGE,
    DEFAULT_DEVICE,
    DEFAULT_MAX_NEW_TOKENS,
    DESKTOP_CLI_PACKAGE,
    MODEL_DIRS,
    model_paths,
)


def read_prompt(prompt: str | None, prompt_file: Path | None) -> str | None:
    """--prompt wins over --prompt-file; None if neither is given."""
    if prompt is not None:
        return prompt
    if prompt_file is not None:
        return prompt_file.read_text()
    return None


def android_cli_command(
    model_kind: str,
    models_dir: Path,
    prompt: str,
    images: Sequence[str],
    max_new_tokens: int | None = None,
) -> list[str]:
    """cargo run -p deepseek-ocr-android --bin android-cli --release -- <model paths> --prompt .. --image .."""
    paths = model_paths(model_kind, models_dir)
    cmd = [
        "cargo",
        "run",
        "-p",
        ANDROID_CLI_PACKAGE,
        "--bin",
        ANDROID_CLI_BIN,
        "--release",
        "--",
        "--model-kind",
        model_kind,
        "--config-path",
        str(paths["config_path"]),
        "--tokenizer-path",
        str(paths["tokenizer_path"]),
        "--weights-path",
        str(paths["weights_path"]),
        "--prompt",
        prompt,
    ]
    for img in images:
        cmd += ["--image", img]
    if max_new_tokens is not None:
        cmd += ["--max-new-tokens", str(max_new_tokens)]
    return cmd


def desktop_cli_command(
    prompt: str,
    images: Sequence[str],
    model: str | None = None,
    device: str = DEFAULT_DEVICE,
    dtype: str | None = None,
    max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS,
    features: Sequence[str] | None = None,
) -> list[str]:
    """cargo run -p deepseek-ocr-cli --release [--features ..] -- [--model ..] --prompt .. --image .. --device .."""
    if features is None:
        # metal device needs the metal cargo feature
        features = ["metal"] if device == "metal" else []
    cmd = ["cargo", "run", "-p", DESKTOP_CLI_PACKAGE, "--release"]
    if features:
        cmd += ["--features", ",".join(features)]
    cmd.append("--")
    if model:
        cmd += ["--model", model]
    cmd += ["--prompt", prompt]
    for img in images:
        cmd += ["--image", img]
    cmd += ["--device", device]
    if dtype:
        cmd += ["--dtype", dtype]
    cmd += ["--max-new-tokens", str(max_new_tokens)]
    return cmd


def run_android_cli(
    model_kind: str,
    models_dir: Path,
    prompt: str | None,
    images: Sequence[str],
    project_root: Path,
    max_new_tokens: int | None = None,
) -> int:
    """Run android-cli via cargo. Returns cargo's exit status, or 1 on a usage error."""
    if model_kind not in MODEL_DIRS:
        print(
            f"❌ Unknown model kind: {model_kind}. Use {', '.join(sorted(MODEL_DIRS))}.",
            file=sys.stderr,
        )
        return 1
    if prompt is None:
        print("❌ either --prompt or --prompt-file must be provided", file=sys.stderr)
        return 1
    if not images:
        print("❌ at least one --image is required", file=sys.stderr)
        return 1
    cmd = android_cli_command(model_kind, models_dir, prompt, images, max_new_tokens)
    print(f"🔍 Running {ANDROID_CLI_BIN} ({model_kind})")
    return run_command(cmd, project_root)


def run_desktop_cli(
    prompt: str | None,
    images: Sequence[str],
    project_root: Path,
    model: str | None = None,
    device: str = DEFAULT_DEVICE,
    dtype: str | None = None,
    max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS,
    features: Sequence[str] | None = None,
) -> int:
    """Run deepseek-ocr-cli via cargo. Returns cargo's exit status, or 1 on a usage error."""
    if prompt is None:
        print("❌ either --prompt or --prompt-file must be provided", file=sys.stderr)
        return 1
    if not images:
        print("❌ at least one --image is required", file=sys.stderr)
        return 1
    cmd = desktop_cli_command(prompt, images, model, device, dtype, max_new_tokens, features)
    print(f"🔍 Running {DESKTOP_CLI_PACKAGE} (device={device})")
    return run_command(cmd, project_root)
