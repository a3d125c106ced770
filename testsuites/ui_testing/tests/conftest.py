"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for real-browser tests, providing fixtures for
browser management and page objects.

Key Features:
- Browser and page lifecycle management
- Page Object fixtures
- Screenshot capture on failure
- Skips the suite when no browser can be launched

================================================================================
"""

from typing import AsyncGenerator

import allure
import pytest
from loguru import logger
from playwright.async_api import Page

from autotest_ui.framework import BrowserManager
from testsuites.ui_testing.pages import FormPage


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Browser manager fixture.

    Browser type, headless mode and viewport come from configuration
    (`browser.*`, overridable with BROWSER__TYPE / BROWSER__HEADLESS).
    """
    manager = BrowserManager()
    try:
        await manager.start()
    except Exception as e:
        pytest.skip(f"Browser could not be launched: {e}")
    yield manager
    await manager.close()


@pytest.fixture
async def page(request, browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Attaches a full-page screenshot to the Allure report when the test fails.
    """
    page = await browser_manager.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            allure.attach(
                await page.screenshot(full_page=True),
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
        except Exception as e:
            # Log but don't fail if screenshot capture fails
            logger.warning(f"Failed to capture screenshot on failure: {e}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
async def form_page(page: Page, browser_manager: BrowserManager) -> FormPage:
    """Provides a loaded FormPage instance."""
    return await FormPage(page, browser=browser_manager.browser).load()


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose the call-phase report to fixtures as `item.rep_call`."""
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.rep_call = report
