#!/usr/bin/env python3
"""
CI script to verify translation keys.

Checks that:
    - every translator.tr("key") used in timing_sheet/ is defined in English
    - every language table defines exactly the English keys

Keys are read from timing_sheet/core/translator.py with ast, so the
script does not import PyQt6.
"""

import ast
import re
import sys
from pathlib import Path

USAGE_PATTERN = re.compile(r'translator\.tr\(\s*["\']([a-z0-9_]+(?:\.[a-z0-9_]+)+)["\']')


def get_language_tables(translator_path: Path) -> dict[str, set[str]]:
    """Return ``{language: keys}`` from the ``self._data`` dict literal."""
    tree = ast.parse(translator_path.read_text(encoding="utf-8"))

    tables: dict[str, set[str]] = {}
    for node in ast.walk(tree):
        if not isinstance(node, ast.Assign):
            continue
        target = node.targets[0]
        if not (isinstance(target, ast.Attribute) and target.attr == "_data"):
            continue
        if not isinstance(node.value, ast.Dict):
            continue
        for lang, table in zip(node.value.keys, node.value.values):
            if isinstance(lang, ast.Constant) and isinstance(table, ast.Dict):
                tables[lang.value] = {
                    k.value for k in table.keys
                    if isinstance(k, ast.Constant) and isinstance(k.value, str)
                }
    return tables


def scan_usages(root_dir: Path) -> list[tuple[Path, int, str]]:
    """Scan the package for translator.tr("key") usages."""
    usages = []
    for py_file in root_dir.rglob("*.py"):
        try:
            lines = py_file.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError):
            continue
        for i, line in enumerate(lines, 1):
            for match in USAGE_PATTERN.finditer(line):
                usages.append((py_file, i, match.group(1)))
    return usages


def main():
    root = Path(__file__).resolve().parent.parent
    translator_path = root / "timing_sheet" / "core" / "translator.py"

    if not translator_path.exists():
        print(f"Critical: {translator_path} does not exist.")
        return 1

    tables = get_language_tables(translator_path)
    english = tables.get("en", set())
    print(f"Found {len(english)} English keys, languages: {', '.join(sorted(tables))}")

    problems = []
    for lang, keys in sorted(tables.items()):
        for key in sorted(english - keys):
            problems.append(f"[{lang}] missing '{key}'")
        for key in sorted(keys - english):
            problems.append(f"[{lang}] extra '{key}' not defined in English")

    usages = scan_usages(root / "timing_sheet")
    print(f"Found {len(usages)} translation usages.")
    for file_path, line, key in usages:
        if key not in english:
            problems.append(f"{file_path.relative_to(root)}:{line} uses '{key}' which was not found.")

    if problems:
        print("\nTranslation problems:")
        for p in problems:
            print(p)
        print(f"\nFound {len(problems)} problems.")
        return 1

    print("\nAll translation keys verified!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
