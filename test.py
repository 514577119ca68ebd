#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Test harness for MiniJS integration tests.
Finds all .minijs files under tests/integration/, runs the compiler,
and verifies expected output / error messages.
"""

import os
import re
import subprocess
import sys
from pathlib import Path

COMPILER = [sys.executable, "-m", "minijs.compiler"]
TESTS_DIR = Path("tests/integration")


def parse_test_file(path: Path):
    """Extract expected output, substrings, and optional compile error from the file's first comment block."""
    content = path.read_text(encoding="utf-8")
    lines = content.splitlines()

    header_lines = []
    for line in lines:
        line = line.strip()
        if line.startswith("//"):
            header_lines.append(line[2:].strip())
        else:
            break

    expected = {
        "output": None,
        "contains": [],
        "compile_error": False,
        "error_pattern": None,
    }
    for line in header_lines:
        m = re.match(r"EXPECTED:\s*compile_error", line, re.IGNORECASE)
        if m:
            expected["compile_error"] = True
            continue
        # EXPECTED: <s-expression>
        m = re.match(r"EXPECTED:\s*(.*)", line, re.IGNORECASE)
        if m:
            expected["output"] = m.group(1).strip()
            continue
        m = re.match(r"CONTAINS:\s*(.*)", line, re.IGNORECASE)
        if m:
            expected["contains"].append(m.group(1).strip())
            continue
        m = re.match(r"ERROR:\s*(.*)", line, re.IGNORECASE)
        if m:
            expected["error_pattern"] = m.group(1).strip()
            continue

    return expected


def run_test(test_path: Path):
    """Run a single integration test and return (success, message)."""
    expected = parse_test_file(test_path)

    proc = subprocess.run(
        COMPILER + [str(test_path)],
        capture_output=True,
        text=True,
        cwd=Path.cwd(),
    )

    if expected["compile_error"]:
        if proc.returncode == 0:
            return False, "Expected compilation error, but compiler succeeded"
        if expected["error_pattern"]:
            if expected["error_pattern"] not in proc.stderr:
                return (
                    False,
                    f"Expected error pattern {expected['error_pattern']!r} not found in stderr:\n{proc.stderr}",
                )
        return True, "Compilation failed as expected"

    if proc.returncode != 0:
        return False, f"Compilation failed (exit {proc.returncode}):\n{proc.stderr}"

    got = proc.stdout.rstrip("\n")
    if expected["output"] is not None and got != expected["output"]:
        return False, f"Output mismatch:\n  got:  {got!r}\n  want: {expected['output']!r}"

    for fragment in expected["contains"]:
        if fragment not in got:
            return False, f"Output does not contain {fragment!r}:\n  got: {got!r}"

    return True, "OK"


def main():
    tests = sorted(TESTS_DIR.rglob("*.minijs"))
    if not tests:
        print("No integration tests found.")
        return 1

    failed = 0
    for test in tests:
        rel = os.path.relpath(str(test), start=str(Path.cwd()))
        print(f"TEST {rel} ... ", end="", flush=True)
        ok, msg = run_test(test)
        if ok:
            print("PASS")
        else:
            print("FAIL")
            print(f"  {msg}")
            failed += 1

    if failed:
        print(f"\n{len(tests) - failed} passed, {failed} failed")
        return 1
    print(f"\nAll {len(tests)} tests passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
