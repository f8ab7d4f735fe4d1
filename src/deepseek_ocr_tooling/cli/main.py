"""Main CLI entry point for deepseek-ocr tooling."""

import sys

from deepseek_ocr_tooling.cli import (
    build as build_cli,
)
from deepseek_ocr_tooling.cli import ocr_cmd


def _usage() -> None:
    print("Usage: deepseek-ocr-tooling <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  build-android    - Build libdeepseek_ocr_android.so (cargo-ndk or cargo --target) + UniFFI Kotlin bindings",
        file=sys.stderr,
    )
    print(
        "  run-android-cli  - cargo run the android-cli binary on this host (deepseek, paddle-ocr-vl)",
        file=sys.stderr,
    )
    print("  run-cli          - cargo run deepseek-ocr-cli", file=sys.stderr)


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        _usage()
        sys.exit(1)

    command = sys.argv[1]

    if command == "build-android":
        build_cli.run_build_android_argv()
    elif command == "run-android-cli":
        ocr_cmd.run_android_cli_argv()
    elif command == "run-cli":
        ocr_cmd.run_cli_argv()
    elif command in ("-h", "--help"):
        _usage()
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
