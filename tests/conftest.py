# tests/conftest.py
import pytest


def pytest_collection_modifyitems(items):
    """Mark tests by directory: integration/ and e2e/."""
    for item in items:
        path = str(item.fspath)
        if "/integration/" in path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in path:
            item.add_marker(pytest.mark.e2e)
