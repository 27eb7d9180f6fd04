"""
Keeps the business summary in sync with the integration scenarios.

Fails when a scenario is added without documentation, or when the
documentation mentions a scenario that no longer exists.
"""

import importlib.util
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / 'scripts' / 'validate_test_docs_sync.py'


@pytest.fixture(scope="module")
def sync():
    spec = importlib.util.spec_from_file_location("validate_test_docs_sync", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


class TestDocumentationSync:
    """Ensure test documentation stays in sync with actual tests."""

    def test_doc_files_exist(self, sync):
        assert sync.TEST_FILE.exists(), f"Test file not found: {sync.TEST_FILE}"
        assert sync.DOC_FILE.exists(), f"Documentation file not found: {sync.DOC_FILE}"

    def test_all_test_classes_documented(self, sync):
        result = sync.check_sync()
        assert not result.missing_classes, (
            f"Test classes not documented in business summary: {result.missing_classes}\n"
            f"Please update docs/test_scenarios_business_summary.md"
        )

    def test_all_test_methods_documented(self, sync):
        result = sync.check_sync()
        assert not result.missing_methods, (
            f"Test methods not documented in business summary: {result.missing_methods}\n"
            f"Please update docs/test_scenarios_business_summary.md"
        )

    def test_no_stale_documentation(self, sync):
        result = sync.check_sync()
        assert not (result.stale_classes or result.stale_methods), (
            f"Documented tests no longer exist: {result.stale_classes | result.stale_methods}\n"
            f"Please update docs/test_scenarios_business_summary.md"
        )
