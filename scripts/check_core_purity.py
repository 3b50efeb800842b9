#!/usr/bin/env python3
"""Core purity validation script.

Enforces the architectural rule that the evaluation layer (core/ and types/)
never performs I/O and never depends on a concrete platform adapter. Platform
state must reach it only through the protocols in types/protocols.py.

This script scans for:
- Imports from datausage_settings.platform
- Imports of modules that perform I/O (os, subprocess, socket, yaml, ...)
- Direct file access via open()

core/config.py is the configuration loader and is exempt.

Exit codes:
    0: No violations found (clean)
    1: Violations detected (architectural rule broken)
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Final

# ANSI color codes for terminal output
RED: Final[str] = "\033[91m"
GREEN: Final[str] = "\033[92m"
YELLOW: Final[str] = "\033[93m"
RESET: Final[str] = "\033[0m"

# Directories that must stay free of I/O
PROTECTED_DIRS: Final[tuple[str, ...]] = ("core", "types")

# Files inside protected directories allowed to do I/O
EXEMPT_FILES: Final[frozenset[str]] = frozenset({"config.py"})

PLATFORM_IMPORT_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?:from|import)\s+datausage_settings\.platform\b")

IO_IMPORT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?:import|from)\s+(?:os|subprocess|socket|shutil|yaml|httpx|requests)\b"
)

OPEN_CALL_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?<![\w.])open\(")


def check_file(file_path: Path) -> list[tuple[int, str]]:
    """Check a single Python file for purity violations.

    Args:
        file_path: Path to the Python file to check.

    Returns:
        List of (line_number, violation_description) tuples.
    """
    violations: list[tuple[int, str]] = []

    try:
        lines = file_path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        print(f"{YELLOW}Warning: Could not read {file_path}: {e}{RESET}", file=sys.stderr)
        return violations

    for line_num, line in enumerate(lines, start=1):
        if line.strip().startswith("#"):
            continue

        if PLATFORM_IMPORT_PATTERN.search(line):
            violations.append((line_num, f"Import from platform adapter: {line.strip()}"))

        if IO_IMPORT_PATTERN.search(line):
            violations.append((line_num, f"Import of I/O module: {line.strip()}"))

        if OPEN_CALL_PATTERN.search(line):
            violations.append((line_num, f"Direct file access: {line.strip()}"))

    return violations


def scan_directory(base_path: Path, protected_dir: str) -> dict[Path, list[tuple[int, str]]]:
    """Scan a protected directory for violations.

    Args:
        base_path: Root path of the datausage_settings package.
        protected_dir: Name of protected directory.

    Returns:
        Dictionary mapping file paths to their violations.
    """
    dir_path = base_path / protected_dir
    if not dir_path.exists():
        print(
            f"{YELLOW}Warning: Protected directory {dir_path} does not exist{RESET}",
            file=sys.stderr,
        )
        return {}

    violations_by_file: dict[Path, list[tuple[int, str]]] = {}

    for py_file in dir_path.rglob("*.py"):
        if "__pycache__" in py_file.parts or py_file.name in EXEMPT_FILES:
            continue

        file_violations = check_file(py_file)
        if file_violations:
            violations_by_file[py_file] = file_violations

    return violations_by_file


def main() -> int:
    """Main entry point for the core purity check.

    Returns:
        Exit code: 0 if no violations, 1 if violations found.
    """
    project_root = Path(__file__).parent.parent
    src_path = project_root / "src" / "datausage_settings"

    if not src_path.exists():
        print(f"{RED}Error: Could not find src/datausage_settings directory{RESET}", file=sys.stderr)
        return 1

    print("Checking core purity in core and types modules...")
    print(f"Scanning: {src_path}\n")

    all_violations: dict[Path, list[tuple[int, str]]] = {}
    for protected_dir in PROTECTED_DIRS:
        all_violations.update(scan_directory(src_path, protected_dir))

    if not all_violations:
        print(f"{GREEN}✓ No core purity violations found{RESET}")
        return 0

    total_violations = sum(len(v) for v in all_violations.values())
    print(f"{RED}✗ Found {total_violations} core purity violations:{RESET}\n")

    for file_path, violations in sorted(all_violations.items()):
        try:
            rel_path = file_path.relative_to(project_root)
        except ValueError:
            rel_path = file_path

        print(f"{RED}{rel_path}{RESET}")
        for line_num, description in violations:
            print(f"  {line_num}: {description}")
        print()

    print(f"{RED}Core purity check failed!{RESET}")
    print("\nMove I/O into datausage_settings.platform and pass snapshots through the protocols.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
