"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and initializes logging once per session.

================================================================================
"""

from pathlib import Path

import pytest

from autotest_ui import __version__
from autotest_ui.common import init_logger


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Tests running against in-memory page fakes"
    )
    config.addinivalue_line(
        "markers", "ui: Tests driving a real browser"
    )
    config.addinivalue_line(
        "markers", "visual: Visual regression tests"
    )

    init_logger()


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds the domain marker matching the directory a test lives in.
    """
    for item in items:
        path = Path(str(item.fspath))

        # Auto-add 'unit' marker to tests in unit directory
        if path.parent.name == "unit":
            item.add_marker(pytest.mark.unit)

        # Auto-add 'ui' marker to tests in ui_testing directory
        if "ui_testing" in path.parts:
            item.add_marker(pytest.mark.ui)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        f"Autotest UI {__version__}",
        "=" * 60,
        "",
    ]
