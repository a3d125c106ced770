"""
================================================================================
Screenshot Capture
================================================================================

Writes the current visual state of a Playwright page to a PNG file.

Errors (closed page, unwritable directory) propagate to the caller; the
visual pipeline is the one place that turns them into log lines.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import allure
from loguru import logger
from playwright.async_api import Page


class ScreenshotCapture:
    """
    Capture page screenshots to explicit destinations.

    Usage:
        >>> capture = ScreenshotCapture()
        >>> await capture.capture(page, "reports/visual-tests/current/home-current-2024-05-01.png")
    """

    def __init__(self, full_page: bool = False, attach_to_allure: bool = False):
        """
        Args:
            full_page: Capture the full scrollable page instead of the viewport
            attach_to_allure: Attach every capture to the Allure report
        """
        self.full_page = full_page
        self.attach_to_allure = attach_to_allure

    async def capture(self, page: Page, destination: Union[str, Path]) -> Path:
        """
        Capture `page` to `destination`.

        Returns:
            Path of the written image

        Raises:
            OSError: Destination directory cannot be created
            playwright.async_api.Error: Page closed or unreachable
        """
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)

        await page.screenshot(path=str(destination), full_page=self.full_page)
        logger.info(f"Successfully captured screenshot: {destination.name}")

        if self.attach_to_allure:
            allure.attach.file(
                str(destination),
                name=destination.stem,
                attachment_type=allure.attachment_type.PNG,
            )
        return destination


__all__ = [
    "ScreenshotCapture",
]
