#!/usr/bin/env python3
# Copyright 2026 gradle-parser Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, type check, tests and build.

Usage::

    uv run tools/ci.py            # every step
    uv run tools/ci.py --skip Build --skip "Type check"
"""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/gradle_parser"]),
    ("Tests", ["uv", "run", "pytest", "--cov=gradle_parser", "--cov-report=term-missing"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run gradle-parser CI checks")
    parser.add_argument("--skip", action="append", default=[], metavar="STEP", help="Step name to skip")
    args = parser.parse_args()

    results = [_run_step(name, cmd) for name, cmd in STEPS if name not in args.skip]

    print()
    print(_banner("Summary"))
    for name, passed, elapsed in results:
        paint = chalk.green if passed else chalk.red
        print(paint(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> str:
    sep = chalk.blue("=" * 60)
    return f"{sep}\n{chalk.blue(title)}\n{sep}"


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{_banner(name)}")
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=pathlib.Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


if __name__ == "__main__":
    sys.exit(main())
