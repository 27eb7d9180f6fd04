#!/usr/bin/env python3
"""
Validate that docs/test_scenarios_business_summary.md stays in sync with
tests/test_integration_scenarios.py.

Errors: test classes or methods missing from the summary.
Warnings: documented tests that no longer exist.

Run: python scripts/validate_test_docs_sync.py
"""

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_FILE = PROJECT_ROOT / 'tests' / 'test_integration_scenarios.py'
DOC_FILE = PROJECT_ROOT / 'docs' / 'test_scenarios_business_summary.md'

CLASS_RE = re.compile(r'^class (Test\w+)')
METHOD_RE = re.compile(r'^\s+def (test_\w+)')
DOC_CLASS_RE = re.compile(r'\*\*Test Class\*\*:\s*`(Test\w+)`')
DOC_METHOD_RE = re.compile(r'\*\*Test Method\*\*:\s*`(test_\w+)`')


@dataclass
class SyncResult:
    test_classes: dict[str, list[str]]
    missing_classes: set[str] = field(default_factory=set)
    missing_methods: set[str] = field(default_factory=set)
    stale_classes: set[str] = field(default_factory=set)
    stale_methods: set[str] = field(default_factory=set)

    @property
    def ok(self) -> bool:
        return not (self.missing_classes or self.missing_methods)


def parse_test_file(path: Path) -> dict[str, list[str]]:
    """Map each Test* class to its test_* methods, in file order."""
    classes: dict[str, list[str]] = {}
    current = None
    for line in path.read_text().splitlines():
        if match := CLASS_RE.match(line):
            current = match.group(1)
            classes[current] = []
        elif current and (match := METHOD_RE.match(line)):
            classes[current].append(match.group(1))
    return classes


def parse_doc_file(path: Path) -> tuple[set[str], set[str]]:
    content = path.read_text()
    return set(DOC_CLASS_RE.findall(content)), set(DOC_METHOD_RE.findall(content))


def check_sync(test_file: Path = TEST_FILE, doc_file: Path = DOC_FILE) -> SyncResult:
    test_classes = parse_test_file(test_file)
    doc_classes, doc_methods = parse_doc_file(doc_file)
    methods = {m for ms in test_classes.values() for m in ms}

    return SyncResult(
        test_classes=test_classes,
        missing_classes=set(test_classes) - doc_classes,
        missing_methods=methods - doc_methods,
        stale_classes=doc_classes - set(test_classes),
        stale_methods=doc_methods - methods,
    )


def main():
    for path in (TEST_FILE, DOC_FILE):
        if not path.exists():
            print(f"❌ File not found: {path}")
            sys.exit(1)

    result = check_sync()

    print("=" * 60)
    print("Test Documentation Sync Validation")
    print("=" * 60)

    for label, names in (("Missing class documentation", result.missing_classes),
                         ("Missing method documentation", result.missing_methods)):
        for name in sorted(names):
            print(f"❌ {label}: {name}")

    for label, names in (("Documented class no longer exists", result.stale_classes),
                         ("Documented method no longer exists", result.stale_methods)):
        for name in sorted(names):
            print(f"⚠️  {label}: {name}")

    print("\nCoverage by Class:")
    for cls, methods in result.test_classes.items():
        print(f"\n  {'✅' if cls not in result.missing_classes else '❌'} {cls}")
        for method in methods:
            print(f"      {'✅' if method not in result.missing_methods else '❌'} {method}")

    if result.ok and not (result.stale_classes or result.stale_methods):
        print("\n✅ All tests are documented and in sync!")

    sys.exit(0 if result.ok else 1)


if __name__ == '__main__':
    main()
