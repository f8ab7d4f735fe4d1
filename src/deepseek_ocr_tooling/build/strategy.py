"""Android build strategies: cargo-ndk, or plain cargo --target with rustup provisioning.

Each strategy knows where its output lands, so the candidate paths for the artifact
locator live next to the command that produces them:

- cargo-ndk: {out_dir}/{abi}/{profile}/lib*.so, then {out_dir}/{abi}/lib*.so
  (older cargo-ndk versions drop the profile directory)
- cargo --target: {cargo_target_dir}/{target}/{profile}/lib*.so
"""

from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from deepseek_ocr_tooling.build.config import PREFIX, AndroidBuildConfig
from deepseek_ocr_tooling.helpers import cargo_profile_flags, run_command

log = logging.getLogger(__name__)


class BuildStrategy(ABC):
    """Common interface: build() returns an exit status, candidates() the paths to check afterwards."""

    def __init__(self, config: AndroidBuildConfig) -> None:
        self.config = config

    def cargo_env(self) -> dict[str, str]:
        """CARGO_TARGET_DIR for cargo, so the build writes where candidates() and the search look."""
        return {"CARGO_TARGET_DIR": str(self.config.cargo_target_path)}

    @abstractmethod
    def announce(self) -> str: ...

    @abstractmethod
    def command(self) -> list[str]: ...

    @abstractmethod
    def build(self) -> int: ...

    @abstractmethod
    def candidates(self) -> list[Path]: ...


class CargoNdkStrategy(BuildStrategy):
    """cargo ndk -t <abi> -o <out_dir> build -p <crate>. cargo-ndk provisions the target itself."""

    def announce(self) -> str:
        c = self.config
        return f"{PREFIX} Using cargo-ndk (ABI={c.abi}, profile={c.profile})"

    def command(self) -> list[str]:
        c = self.config
        return [
            "cargo",
            "ndk",
            "-t",
            c.abi,
            "-o",
            c.out_dir,
            "build",
            "-p",
            c.crate,
            *cargo_profile_flags(c.profile),
        ]

    def build(self) -> int:
        print(self.announce())
        rc = run_command(self.command(), self.config.project_root, self.cargo_env())
        if rc != 0:
            print(f"❌ cargo ndk build failed (exit {rc})", file=sys.stderr)
        return rc

    def candidates(self) -> list[Path]:
        c = self.config
        abi_dir = c.out_path / c.abi
        return [abi_dir / c.profile / c.artifact_name, abi_dir / c.artifact_name]


class CargoTargetStrategy(BuildStrategy):
    """rustup target add (if missing), then cargo build -p <crate> --target <triple>."""

    def announce(self) -> str:
        return (
            f"{PREFIX} cargo-ndk not found; falling back to cargo build for target "
            f"{self.config.target}"
        )

    def command(self) -> list[str]:
        c = self.config
        return [
            "cargo",
            "build",
            "-p",
            c.crate,
            "--target",
            c.target,
            *cargo_profile_flags(c.profile),
        ]

    def installed_targets(self) -> list[str] | None:
        """Lines of `rustup target list --installed`, or None if rustup could not report them."""
        try:
            r = subprocess.run(
                ["rustup", "target", "list", "--installed"],
                capture_output=True,
                text=True,
                cwd=str(self.config.project_root),
            )
        except OSError as e:
            log.warning("rustup target list failed: %s", e)
            return None
        if r.returncode != 0:
            log.warning("rustup target list exited %s", r.returncode)
            return None
        return [line.strip() for line in (r.stdout or "").splitlines() if line.strip()]

    def ensure_target(self) -> int:
        """Install the target triple unless rustup already lists it. Returns 0 or rustup's exit status."""
        target = self.config.target
        installed = self.installed_targets()
        if installed is not None and target in installed:
            log.debug("rust target %s already installed", target)
            return 0
        # Unreadable list falls through to add; rustup target add is a no-op when installed.
        print(f"{PREFIX} Installing Rust target {target}")
        rc = run_command(["rustup", "target", "add", target], self.config.project_root)
        if rc != 0:
            print(f"❌ rustup target add {target} failed (exit {rc})", file=sys.stderr)
        return rc

    def build(self) -> int:
        print(self.announce())
        rc = self.ensure_target()
        if rc != 0:
            return rc
        rc = run_command(self.command(), self.config.project_root, self.cargo_env())
        if rc != 0:
            print(f"❌ cargo build failed for {self.config.target} (exit {rc})", file=sys.stderr)
        return rc

    def candidates(self) -> list[Path]:
        c = self.config
        return [c.cargo_target_path / c.target / c.profile / c.artifact_name]


def select_strategy(config: AndroidBuildConfig, use_cargo_ndk: bool) -> BuildStrategy:
    """cargo-ndk when available, else plain cargo with rustup provisioning."""
    if use_cargo_ndk:
        return CargoNdkStrategy(config)
    return CargoTargetStrategy(config)
