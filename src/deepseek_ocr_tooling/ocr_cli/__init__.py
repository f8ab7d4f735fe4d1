"""cargo run wrappers for the OCR programs (android-cli on desktop hosts, deepseek-ocr-cli)."""

from .presets import MODEL_DIRS, model_paths, resolve_models_dir
from .runner import (
    android_cli_command,
    desktop_cli_command,
    read_prompt,
    run_android_cli,
    run_desktop_cli,
)

__all__ = [
    "MODEL_DIRS",
    "android_cli_command",
    "desktop_cli_command",
    "model_paths",
    "read_prompt",
    "resolve_models_dir",
    "run_android_cli",
    "run_desktop_cli",
]
