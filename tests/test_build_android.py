"""Tests for deepseek_ocr_tooling.build.android (end-to-end with fake cargo/rustup/uniffi-bindgen)."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from conftest import LIB, touch, which_only

from deepseek_ocr_tooling.build.android import locate_artifact, run, search_roots
from deepseek_ocr_tooling.build.config import resolve_build_config
from deepseek_ocr_tooling.build.strategy import CargoNdkStrategy, CargoTargetStrategy

NDK_OUT = f"target/android/arm64-v8a/release/{LIB}"
CARGO_OUT = f"target/aarch64-linux-android/release/{LIB}"


class TestRunWithCargoNdk:
    def test_locates_abi_profile_path_without_search(
        self, build_config, fake_toolchain, tmp_path: Path, capsys
    ) -> None:
        fake = fake_toolchain(outputs=(NDK_OUT,))
        with (
            patch("shutil.which", side_effect=which_only("cargo-ndk")),
            patch("subprocess.run", side_effect=fake),
            patch("deepseek_ocr_tooling.build.artifact.search_tree") as m_search,
        ):
            assert run(build_config) == 0
        m_search.assert_not_called()
        out = capsys.readouterr().out
        assert "Using cargo-ndk (ABI=arm64-v8a, profile=release)" in out
        assert f"Shared library ready at {tmp_path / NDK_OUT}" in out
        assert fake.calls == [
            [
                "cargo",
                "ndk",
                "-t",
                "arm64-v8a",
                "-o",
                "target/android",
                "build",
                "-p",
                "deepseek-ocr-android",
                "--release",
            ]
        ]

    def test_accepts_abi_only_layout(self, build_config, fake_toolchain, capsys) -> None:
        fake = fake_toolchain(outputs=(f"target/android/arm64-v8a/{LIB}",))
        with (
            patch("shutil.which", side_effect=which_only("cargo-ndk")),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 0
        assert f"target/android/arm64-v8a/{LIB}" in capsys.readouterr().out

    def test_compile_failure_skips_locate_and_bindings(
        self, build_config, fake_toolchain
    ) -> None:
        fake = fake_toolchain(exit_codes={"cargo ndk": 101})
        with (
            patch("shutil.which", side_effect=which_only("cargo-ndk", "uniffi-bindgen")),
            patch("subprocess.run", side_effect=fake),
            patch("deepseek_ocr_tooling.build.android.locate_artifact") as m_locate,
        ):
            assert run(build_config) == 101
        m_locate.assert_not_called()
        assert fake.commands("uniffi-bindgen") == []


class TestRunWithFallback:
    def test_provisions_missing_target_then_builds(
        self, build_config, fake_toolchain, tmp_path: Path, capsys
    ) -> None:
        fake = fake_toolchain(outputs=(CARGO_OUT,))
        with (
            patch("shutil.which", return_value=None),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 0
        assert [c[:3] for c in fake.calls] == [
            ["rustup", "target", "list"],
            ["rustup", "target", "add"],
            ["cargo", "build", "-p"],
        ]
        assert "--target" in fake.calls[2]
        assert "aarch64-linux-android" in fake.calls[2]
        out = capsys.readouterr().out
        assert "cargo-ndk not found; falling back to cargo build" in out
        assert f"Shared library ready at {tmp_path / CARGO_OUT}" in out

    def test_installed_target_never_added(self, build_config, fake_toolchain) -> None:
        fake = fake_toolchain(installed=("aarch64-linux-android",), outputs=(CARGO_OUT,))
        with (
            patch("shutil.which", return_value=None),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 0
        assert fake.commands("rustup target add") == []

    def test_recursive_search_finds_stray_artifact(
        self, build_config, fake_toolchain, tmp_path: Path, capsys
    ) -> None:
        fake = fake_toolchain(outputs=(f"target/aarch64-linux-android/release/deps/{LIB}",))
        with (
            patch("shutil.which", return_value=None),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 0
        assert "release/deps" in capsys.readouterr().out

    def test_not_found_exits_1(self, build_config, fake_toolchain, capsys) -> None:
        fake = fake_toolchain(outputs=("target/aarch64-linux-android/release/libother.so",))
        with (
            patch("shutil.which", side_effect=which_only("uniffi-bindgen")),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 1
        err = capsys.readouterr().err
        assert f"{LIB} was not found" in err
        assert fake.commands("uniffi-bindgen") == []

    def test_rerun_is_idempotent(self, build_config, fake_toolchain) -> None:
        fake = fake_toolchain(installed=("aarch64-linux-android",), outputs=(CARGO_OUT,))
        with (
            patch("shutil.which", side_effect=which_only("uniffi-bindgen")),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 0
            assert run(build_config) == 0
        assert len(fake.commands("uniffi-bindgen generate")) == 2


class TestRunBindings:
    def test_generator_absent_still_exits_0(self, build_config, fake_toolchain, capsys) -> None:
        fake = fake_toolchain(outputs=(NDK_OUT,))
        with (
            patch("shutil.which", side_effect=which_only("cargo-ndk")),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 0
        assert "UniFFI generation skipped: uniffi-bindgen not found" in capsys.readouterr().err

    def test_generator_invoked_with_artifact(
        self, build_config, fake_toolchain, tmp_path: Path
    ) -> None:
        fake = fake_toolchain(outputs=(NDK_OUT,))
        with (
            patch("shutil.which", side_effect=which_only("cargo-ndk", "uniffi-bindgen")),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 0
        (cmd,) = fake.commands("uniffi-bindgen")
        out_dir = tmp_path / "bindings" / "kotlin"
        assert cmd == [
            "uniffi-bindgen",
            "generate",
            "--library",
            str(tmp_path / NDK_OUT),
            "--language",
            "kotlin",
            "--out-dir",
            str(out_dir),
        ]
        assert out_dir.is_dir()

    def test_generator_failure_is_fatal_but_keeps_artifact(
        self, build_config, fake_toolchain, tmp_path: Path, capsys
    ) -> None:
        fake = fake_toolchain(outputs=(NDK_OUT,), exit_codes={"uniffi-bindgen generate": 2})
        with (
            patch("shutil.which", side_effect=which_only("cargo-ndk", "uniffi-bindgen")),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(build_config) == 2
        assert (tmp_path / NDK_OUT).is_file()
        assert "uniffi-bindgen failed (exit 2)" in capsys.readouterr().err

    def test_custom_generator_name(self, tmp_path: Path, fake_toolchain) -> None:
        cfg = resolve_build_config(
            env={"UNIFFI_BINDGEN_BIN": "bindgen-x", "UNIFFI_OUTPUT_ROOT": "gen"},
            project_root=tmp_path,
        )
        fake = fake_toolchain(outputs=(NDK_OUT,))
        with (
            patch("shutil.which", side_effect=which_only("cargo-ndk", "bindgen-x")),
            patch("subprocess.run", side_effect=fake),
        ):
            assert run(cfg) == 0
        (cmd,) = fake.commands("bindgen-x")
        assert cmd[-1] == str(tmp_path / "gen" / "kotlin")


class TestSearchRoots:
    def test_out_dir_inside_target_not_repeated(self, build_config, tmp_path: Path) -> None:
        assert search_roots(build_config) == [tmp_path / "target"]

    def test_out_dir_outside_target_added(self, tmp_path: Path) -> None:
        cfg = resolve_build_config(env={"OUT_DIR": "jniLibs"}, project_root=tmp_path)
        assert search_roots(cfg) == [tmp_path / "target", tmp_path / "jniLibs"]

    def test_locate_finds_out_dir_outside_target(self, tmp_path: Path) -> None:
        cfg = resolve_build_config(env={"OUT_DIR": "jniLibs"}, project_root=tmp_path)
        f = touch(tmp_path / "jniLibs" / "arm64-v8a" / "nested" / LIB)
        assert locate_artifact(cfg, CargoNdkStrategy(cfg)) == f


class TestCargoTargetDir:
    @staticmethod
    def _cargo_writes_where_told(root: Path, calls: list):
        """cargo stand-in: writes the .so under $CARGO_TARGET_DIR, else under root/target."""

        def fake_run(cmd, **kwargs):
            calls.append((list(cmd), kwargs))
            if cmd[:4] == ["rustup", "target", "list", "--installed"]:
                return MagicMock(returncode=0, stdout="aarch64-linux-android\n")
            if cmd[:2] == ["cargo", "build"]:
                env = kwargs.get("env") or {}
                target_dir = Path(env.get("CARGO_TARGET_DIR", root / "target"))
                touch(target_dir / "aarch64-linux-android" / "release" / LIB)
            return MagicMock(returncode=0, stdout="")

        return fake_run

    def test_cargo_builds_into_configured_dir(self, tmp_path: Path, capsys) -> None:
        cfg = resolve_build_config(
            env={}, overrides={"cargo_target_dir": "build-out"}, project_root=tmp_path
        )
        calls: list = []
        with (
            patch("shutil.which", return_value=None),
            patch("subprocess.run", side_effect=self._cargo_writes_where_told(tmp_path, calls)),
        ):
            assert run(cfg) == 0
        expected = tmp_path / "build-out" / "aarch64-linux-android" / "release" / LIB
        assert expected.is_file()
        assert not (tmp_path / "target").exists()
        assert f"Shared library ready at {expected}" in capsys.readouterr().out
        (cargo_kwargs,) = [kw for cmd, kw in calls if cmd[:2] == ["cargo", "build"]]
        assert cargo_kwargs["env"]["CARGO_TARGET_DIR"] == str(tmp_path / "build-out")

    def test_stale_default_target_not_reported(self, tmp_path: Path) -> None:
        touch(tmp_path / "target" / "aarch64-linux-android" / "release" / LIB)
        cfg = resolve_build_config(
            env={}, overrides={"cargo_target_dir": "build-out"}, project_root=tmp_path
        )
        strategy = CargoTargetStrategy(cfg)
        calls: list = []
        with patch("subprocess.run", side_effect=self._cargo_writes_where_told(tmp_path, calls)):
            assert strategy.build() == 0
        assert locate_artifact(cfg, strategy) == (
            tmp_path / "build-out" / "aarch64-linux-android" / "release" / LIB
        )
