"""Generate UniFFI Kotlin bindings from the built shared library, if uniffi-bindgen is installed."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

from deepseek_ocr_tooling.build.config import PREFIX
from deepseek_ocr_tooling.helpers import resolve_under, run_command

LANGUAGE = "kotlin"


def resolve_bindgen(bindgen_bin: str, cwd: Path) -> str:
    """A bare name is looked up on PATH as-is; a path (tools/uniffi-bindgen) is taken relative to cwd."""
    if os.sep in bindgen_bin or (os.altsep and os.altsep in bindgen_bin):
        return str(resolve_under(cwd, bindgen_bin))
    return bindgen_bin


def generate_bindings(artifact: Path, bindgen_bin: str, out_dir: Path, cwd: Path) -> int:
    """Run <bindgen_bin> generate --library <artifact> --language kotlin --out-dir <out_dir>.

    Missing generator is not an error: prints a warning and returns 0. Otherwise returns
    the generator's exit status. The artifact itself is never touched.
    """
    bindgen = resolve_bindgen(bindgen_bin, cwd)
    if not shutil.which(bindgen):
        print(
            f"{PREFIX} ⚠️ UniFFI generation skipped: {bindgen_bin} not found",
            file=sys.stderr,
        )
        return 0
    out_dir.mkdir(parents=True, exist_ok=True)
    print(f"{PREFIX} Generating UniFFI Kotlin bindings into {out_dir}")
    rc = run_command(
        [
            bindgen,
            "generate",
            "--library",
            str(artifact),
            "--language",
            LANGUAGE,
            "--out-dir",
            str(out_dir),
        ],
        cwd,
    )
    if rc != 0:
        print(
            f"❌ {bindgen_bin} failed (exit {rc}); shared library is still at {artifact}",
            file=sys.stderr,
        )
    return rc
