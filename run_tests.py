#!/usr/bin/env python3
"""
Test runner script for StockPulse.

Shortcuts for running the suite or one layer of it.
"""

import shutil
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).parent

PYTEST = [sys.executable, "-m", "pytest"]

SUITES = {
    "core": ("tests/test_core/", "Running core market data tests"),
    "services": ("tests/test_services/", "Running service layer tests"),
    "api": ("tests/test_webapi/", "Running API tests"),
    "ormdb": ("tests/test_ormdb/", "Running persistence tests"),
    "config": ("tests/test_config/", "Running configuration tests"),
}

USAGE = """Usage: python run_tests.py <command>

Available commands:
  all        - Run all tests with coverage
  unit       - Run tests that need no network access
  core       - Run core market data tests
  services   - Run service layer tests
  api        - Run API tests
  ormdb      - Run persistence tests
  config     - Run configuration tests
  fast       - Run tests without coverage
  coverage   - Generate coverage report
  clean      - Clean test artifacts"""


def run_command(cmd, description):
    """Run a command and print the description."""
    print(f"\n🧪 {description}")
    print("=" * 50)
    print(f"Running: {' '.join(cmd)}")
    print()

    result = subprocess.run(cmd, cwd=ROOT)
    return result.returncode == 0


def clean():
    """Remove coverage output, caches and bytecode."""
    print("\n🧹 Cleaning test artifacts...")
    for path in (ROOT / ".coverage", ROOT / "htmlcov", ROOT / ".pytest_cache"):
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
    for cache in ROOT.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)
    print("✅ Test artifacts cleaned!")


def main():
    """Main test runner."""
    if len(sys.argv) < 2:
        print(USAGE)
        return

    command = sys.argv[1].lower()

    if command == "all":
        success = run_command(
            PYTEST + ["tests/", "--cov=stockpulse", "--cov-report=html", "-v"],
            "Running all tests with coverage",
        )
    elif command == "unit":
        success = run_command(
            PYTEST + ["tests/", "-m", "not integration", "-v"],
            "Running unit tests only",
        )
    elif command in SUITES:
        path, description = SUITES[command]
        success = run_command(PYTEST + [path, "-v"], description)
    elif command == "fast":
        success = run_command(
            PYTEST + ["tests/", "-q", "-x"],
            "Running tests without coverage (fast)",
        )
    elif command == "coverage":
        success = run_command(
            PYTEST
            + ["tests/", "--cov=stockpulse", "--cov-report=html", "--cov-report=term-missing"],
            "Generating coverage report",
        )
        if success:
            print("\n📊 Coverage report generated!")
            print("   - HTML report: htmlcov/index.html")
    elif command == "clean":
        clean()
        return
    else:
        print(f"❌ Unknown command: {command}")
        print(USAGE)
        sys.exit(2)

    if success:
        print(f"\n✅ {command.title()} tests completed successfully!")
    else:
        print(f"\n❌ {command.title()} tests failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
