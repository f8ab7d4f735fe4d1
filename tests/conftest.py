"""Pytest fixtures for deepseek-ocr tooling tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from deepseek_ocr_tooling.build.config import AndroidBuildConfig, resolve_build_config

LIB = "libdeepseek_ocr_android.so"


@pytest.fixture
def build_config(tmp_path: Path) -> AndroidBuildConfig:
    """Default config rooted at tmp_path, ignoring the real environment."""
    return resolve_build_config(env={}, project_root=tmp_path)


def touch(p: Path) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"\x7fELF")
    return p


class FakeToolchain:
    """subprocess.run stand-in for cargo/rustup/uniffi-bindgen.

    installed: lines printed by `rustup target list --installed`.
    outputs: files (relative to root) that a successful cargo build creates.
    exit_codes: first-two-words of a command ("cargo build", "rustup target", ...) -> exit status.
    """

    def __init__(
        self,
        root: Path,
        installed: tuple[str, ...] = ("x86_64-unknown-linux-gnu",),
        outputs: tuple[str, ...] = (),
        exit_codes: dict[str, int] | None = None,
    ) -> None:
        self.root = root
        self.installed = installed
        self.outputs = outputs
        self.exit_codes = exit_codes or {}
        self.calls: list[list[str]] = []

    def _rc(self, cmd: list[str]) -> int:
        for key, rc in self.exit_codes.items():
            if cmd[: len(key.split())] == key.split():
                return rc
        return 0

    def __call__(self, cmd: list[str], **kwargs: object) -> MagicMock:
        self.calls.append(list(cmd))
        if cmd[:4] == ["rustup", "target", "list", "--installed"]:
            rc = self._rc(cmd)
            return MagicMock(returncode=rc, stdout="\n".join(self.installed) + "\n")
        rc = self._rc(cmd)
        if rc == 0 and cmd[0] == "cargo":
            for rel in self.outputs:
                touch(self.root / rel)
        return MagicMock(returncode=rc, stdout="")

    def commands(self, prefix: str) -> list[list[str]]:
        words = prefix.split()
        return [c for c in self.calls if c[: len(words)] == words]


@pytest.fixture
def fake_toolchain(tmp_path: Path) -> Callable[..., FakeToolchain]:
    def make(**kwargs: object) -> FakeToolchain:
        return FakeToolchain(tmp_path, **kwargs)  # type: ignore[arg-type]

    return make


def which_only(*present: str) -> Callable[[str], str | None]:
    """shutil.which stand-in: only the named executables are on PATH."""

    def which(name: str, *args: object, **kwargs: object) -> str | None:
        return f"/usr/bin/{name}" if name in present else None

    return which
