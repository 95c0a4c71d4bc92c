#!/usr/bin/env python3
"""Run every formatter check, linter and the test suite in sequence.

Order:
1. Black format check
2. isort import order check
3. Ruff static checks
4. Pylint analysis
5. pytest

Output of failing steps is repeated in the summary.
"""

from pathlib import Path
import subprocess
import sys

SOURCE_DIRS = ["app", "core", "infrastructure", "main.py"]


def run_command(cmd: list[str], description: str) -> tuple[bool, str]:
    """Run `cmd` and return (success, combined output)."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print("=" * 60)

    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, check=False, cwd=Path(__file__).parent
        )
    except OSError as e:
        print(f"ERROR: {e}")
        return False, str(e)

    success = result.returncode == 0
    output = result.stdout + result.stderr
    print("OK" if success else "FAILED")
    print(f"\nOutput:\n{output}" if output.strip() else "(no output)")
    return success, output


def main() -> None:
    commands = [
        ([sys.executable, "-m", "black", ".", "--check"], "Black format check"),
        ([sys.executable, "-m", "isort", ".", "--check-only"], "isort import check"),
        ([sys.executable, "-m", "ruff", "check", "."], "Ruff"),
        ([sys.executable, "-m", "pylint", *SOURCE_DIRS], "Pylint"),
        ([sys.executable, "-m", "pytest", "-q"], "pytest"),
    ]

    results = []
    for cmd, description in commands:
        success, output = run_command(cmd, description)
        results.append((description, success, output))

    print(f"\n{'='*60}")
    print("Summary")
    print("=" * 60)
    all_passed = all(success for _, success, _ in results)
    for description, success, _ in results:
        print(f"{description}: {'passed' if success else 'FAILED'}")

    if not all_passed:
        print("\nFailures:")
        for description, success, output in results:
            if not success and output.strip():
                print(f"\n--- {description} ---")
                print(output)

    sys.exit(0 if all_passed else 1)


if __name__ == "__main__":
    main()
