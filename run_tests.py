#!/usr/bin/env python3
"""
Test runner script for tempreg.

Runs the unit suite, the integration suite, or both. Extra arguments after
"--" are passed straight to pytest.
"""

import argparse
from pathlib import Path
import subprocess
import sys


def main():
    parser = argparse.ArgumentParser(description="Run tempreg tests")
    suite = parser.add_mutually_exclusive_group()
    suite.add_argument("--unit", action="store_true", help="Run unit tests only")
    suite.add_argument("--integration", action="store_true", help="Run integration tests only")
    parser.add_argument("--coverage", action="store_true", help="Report coverage for tempreg")
    parser.add_argument("pytest_args", nargs="*", help="Arguments forwarded to pytest")

    args = parser.parse_args()

    tests_dir = Path(__file__).parent / "tests"
    if args.unit:
        tests_dir = tests_dir / "unit"
    elif args.integration:
        tests_dir = tests_dir / "integration"

    cmd = [sys.executable, "-m", "pytest", str(tests_dir)]
    if args.coverage:
        cmd.extend(["--cov=tempreg", "--cov-report=term"])
    cmd.extend(args.pytest_args)

    print(f"Running: {' '.join(cmd)}")
    return subprocess.run(cmd).returncode


if __name__ == "__main__":
    sys.exit(main())
