#!/usr/bin/env python3
"""
Test runner for Execution OS.

Runs the suites for the consistency core one by one, then the whole tree
with a coverage report:
1. System Laws (Consistency Engine)
2. Store Adapter
3. Search ranking
4. Completion Watcher and Agenda rules
"""

import subprocess
import sys
import os
from pathlib import Path


def run_command(cmd, description):
    """Run a command and handle errors"""
    print(f"\n{'='*60}")
    print(f"🔄 {description}")
    print(f"{'='*60}")

    try:
        result = subprocess.run(cmd, shell=True, check=True, capture_output=True, text=True)
        print(result.stdout)
        if result.stderr:
            print("STDERR:", result.stderr)
        print(f"✅ {description} completed successfully")
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed")
        print("STDOUT:", e.stdout)
        print("STDERR:", e.stderr)
        return False


def main():
    """Main test runner"""
    print("🚀 Starting Execution OS Test Suite")

    project_dir = Path(__file__).parent
    os.chdir(project_dir)

    if not run_command("python -m pip install -e '.[test]'", "Installing project dependencies"):
        print("⚠️  Warning: Failed to install dependencies, continuing anyway...")

    test_commands = [
        ("python -m pytest tests/test_services/test_consistency_engine.py -v",
         "System Law Tests (Consistency Engine)"),
        ("python -m pytest tests/test_infrastructure -v",
         "Store Adapter Tests"),
        ("python -m pytest tests/test_services/test_search_service.py -v",
         "Search Ranking Tests"),
        ("python -m pytest tests/test_services/test_completion_watcher.py "
         "tests/test_services/test_agenda_service.py -v",
         "Completion Watcher and Agenda Tests"),
        ("python -m pytest tests/ -v --cov=execution_os --cov-report=html --cov-report=term-missing",
         "All Tests with Coverage Report"),
    ]

    results = []
    for cmd, description in test_commands:
        success = run_command(cmd, description)
        results.append((description, success))

    print(f"\n{'='*60}")
    print("📊 TEST RESULTS SUMMARY")
    print(f"{'='*60}")

    passed = 0
    failed = 0
    for description, success in results:
        status = "✅ PASSED" if success else "❌ FAILED"
        print(f"{status:<10} {description}")
        if success:
            passed += 1
        else:
            failed += 1

    print(f"\n📈 Overall Results: {passed} passed, {failed} failed")

    coverage_html = project_dir / "htmlcov" / "index.html"
    if coverage_html.exists():
        print(f"📋 Coverage report available at: {coverage_html}")

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
