"""
================================================================================
Autotest UI
================================================================================

Asynchronous UI automation core built on Playwright.

Modules:
    - common: Shared configuration and logging utilities
    - framework: Selector translation, waits, element access and actions,
      page objects and browser lifecycle
    - visual: Screenshot baselines and pixel-level visual regression

Example:
    from autotest_ui.framework import BasePage, BrowserManager

    async with BrowserManager() as manager:
        page = BasePage(await manager.new_page())
        await page.open("https://example.com")
        await page.click("#accept-cookies")
        await page.run_visual_test("landing-page")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "framework",
    "visual",
]
