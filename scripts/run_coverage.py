#!/usr/bin/env python3
"""Run the test suite under pytest-cov and enforce a coverage threshold.

Usage:
    python scripts/run_coverage.py [--threshold PERCENT] [--verbose] [PYTEST_ARGS...]

Exit Codes:
    0 - Tests passed and coverage threshold met
    1 - Tests failed or coverage below threshold
    3 - pytest-cov not installed, or pytest errored
"""

import argparse
import subprocess
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE = "attributed_body"
DEFAULT_THRESHOLD = 95

MODULES = [
    ("attributed_body.typedstream", "Typedstream decoder"),
    ("attributed_body.body", "Body reconstruction"),
    ("attributed_body.edited", "Edit history"),
    ("attributed_body.streamtyped", "Legacy string extraction"),
    ("attributed_body.config", "Configuration"),
    ("attributed_body.exceptions", "Exceptions"),
    ("attributed_body.logging", "Logging"),
]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help=f"Minimum coverage percentage (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="List missing lines per module",
    )
    return parser.parse_known_args(argv)


def build_command(args, extra) -> list:
    report = "term-missing" if args.verbose else "term"
    return [
        sys.executable, "-m", "pytest",
        f"--cov={PACKAGE}",
        f"--cov-report={report}",
        f"--cov-fail-under={args.threshold}",
        *extra,
        "tests/",
    ]


def main(argv=None) -> int:
    args, extra = parse_args(argv)

    try:
        import pytest_cov  # noqa: F401
    except ImportError as e:
        print(f"ERROR: {e}. Install with: pip install -e \".[dev]\"")
        return 3

    if args.verbose:
        for module, description in MODULES:
            print(f"  {description:<26} {module}")
        print()

    cmd = build_command(args, extra)
    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=PROJECT_ROOT)

    if result.returncode == 0:
        print(f"SUCCESS: coverage meets {args.threshold}%")
        return 0
    if result.returncode == 1:
        print("FAILURE: tests failed or coverage below threshold")
        return 1
    print(f"ERROR: pytest exited with {result.returncode}")
    return 3


if __name__ == "__main__":
    sys.exit(main())
