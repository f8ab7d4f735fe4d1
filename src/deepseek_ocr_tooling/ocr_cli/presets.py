"""Model presets for the OCR command-line programs (model kind -> cache directory layout)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

ANDROID_CLI_PACKAGE = "deepseek-ocr-android"
ANDROID_CLI_BIN = "android-cli"
DESKTOP_CLI_PACKAGE = "deepseek-ocr-cli"

MODELS_DIR_ENV = "DEEPSEEK_OCR_MODELS_DIR"
DEFAULT_MODELS_DIR = "~/Library/Caches/deepseek-ocr/models"

# --model-kind -> directory under the models dir
MODEL_DIRS: dict[str, str] = {
    "deepseek": "deepseek-ocr",
    "paddle-ocr-vl": "paddleocr-vl",
}

CONFIG_FILE = "config.json"
TOKENIZER_FILE = "tokenizer.json"
WEIGHTS_FILE = "model.safetensors"

DEFAULT_MAX_NEW_TOKENS = 512
DEFAULT_DEVICE = "metal"


def resolve_models_dir(models_dir: str | None = None, env: Mapping[str, str] | None = None) -> Path:
    """--models-dir, else $DEEPSEEK_OCR_MODELS_DIR, else the macOS cache default. ~ is expanded."""
    if env is None:
        env = os.environ
    raw = models_dir or env.get(MODELS_DIR_ENV) or DEFAULT_MODELS_DIR
    return Path(raw).expanduser()


def model_paths(model_kind: str, models_dir: Path) -> dict[str, Path]:
    """config/tokenizer/weights paths for a model kind. Raises KeyError for an unknown kind."""
    base = models_dir / MODEL_DIRS[model_kind]
    return {
        "config_path": base / CONFIG_FILE,
        "tokenizer_path": base / TOKENIZER_FILE,
        "weights_path": base / WEIGHTS_FILE,
    }
