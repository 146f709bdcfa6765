#!/usr/bin/env python
"""Run the jobform test suite and, on request, coverage, mypy and black.

Usage:
    python run_tests.py                # whole suite
    python run_tests.py --core         # tests/form only
    python run_tests.py --tui          # tests/tui only
    python run_tests.py --coverage     # suite plus a coverage report
    python run_tests.py --all-checks   # suite, coverage, mypy and black
"""

import argparse
import subprocess
import sys

SUITES = {"core": "tests/form", "tui": "tests/tui"}


def pytest_command(args: argparse.Namespace) -> list[str]:
    cmd = [sys.executable, "-m", "pytest"]
    if args.verbose:
        cmd.append("-vv")
    cmd.extend(SUITES[name] for name in SUITES if getattr(args, name))
    if args.coverage or args.all_checks:
        cmd.extend(["--cov=jobform", "--cov-report=term-missing"])
    return cmd


def build_checks(args: argparse.Namespace) -> list[tuple[str, list[str]]]:
    checks = [("pytest", pytest_command(args))]
    if args.mypy or args.all_checks:
        checks.append(("mypy", [sys.executable, "-m", "mypy", "jobform", "--ignore-missing-imports"]))
    if args.black or args.all_checks:
        checks.append(
            ("black", [sys.executable, "-m", "black", "--check", "--line-length=120", "jobform", "tests", __file__])
        )
    return checks


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run jobform checks")
    suite = parser.add_mutually_exclusive_group()
    suite.add_argument("--core", action="store_true", help="Only the form core tests")
    suite.add_argument("--tui", action="store_true", help="Only the prompt_toolkit tests")
    parser.add_argument("--coverage", action="store_true", help="Report coverage of the jobform package")
    parser.add_argument("--mypy", action="store_true", help="Type-check the jobform package")
    parser.add_argument("--black", action="store_true", help="Check formatting")
    parser.add_argument("--all-checks", action="store_true", help="Everything above")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    failed = []
    for name, cmd in build_checks(args):
        print(f"--- {name}: {' '.join(cmd)}", flush=True)
        if subprocess.run(cmd).returncode != 0:
            failed.append(name)

    if failed:
        print(f"--- failed: {', '.join(failed)}")
        return 1
    print("--- all checks passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
