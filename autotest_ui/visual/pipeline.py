"""
================================================================================
Visual Regression Pipeline
================================================================================

Orchestrates BaselineStore, ScreenshotCapture and ImageDiffer per test name.

    no baseline  -> capture current, promote it to baseline, done (pass)
    baseline     -> capture current, diff against baseline, log differences

The pipeline is observational: it never raises and never returns a verdict.
Visual differences and I/O or engine failures become error log lines (and an
Allure attachment for the diff image) for separate review.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Callable, Optional

import allure
from loguru import logger
from playwright.async_api import Page

from autotest_ui.common import get_config

from .baseline_store import BaselineStore, VisualTestCase, utc_today
from .image_differ import ImageDiffer
from .screenshot_capture import ScreenshotCapture


DEFAULT_SETTLE_TIMEOUT_MS = 2000


class VisualRegressionPipeline:
    """
    Baseline-or-compare visual checks for named test cases.

    Usage:
        >>> pipeline = VisualRegressionPipeline()
        >>> await pipeline.run_visual_test(page, "checkout-summary")
    """

    def __init__(
        self,
        store: Optional[BaselineStore] = None,
        capture: Optional[ScreenshotCapture] = None,
        differ: Optional[ImageDiffer] = None,
        threshold: Optional[float] = None,
        today: Callable[[], date] = utc_today,
    ):
        """
        Args:
            store: Baseline store (default: configured report root)
            capture: Screenshot capture
            differ: Image differ
            threshold: Per-pixel tolerance; `visual.threshold` when None
            today: Clock used for date-stamping current/diff images
        """
        self.store = store or BaselineStore()
        self.capture = capture or ScreenshotCapture()
        self.differ = differ or ImageDiffer()
        self.threshold = threshold if threshold is not None else get_config("visual.threshold", 0.1)
        self.today = today

    def case_for(self, test_name: str) -> VisualTestCase:
        return self.store.case(test_name, self.today(), self.threshold)

    async def run_visual_test(
        self,
        page: Page,
        test_name: str,
        timeout_ms: int = DEFAULT_SETTLE_TIMEOUT_MS,
    ) -> None:
        """
        Run the visual check for `test_name` against `page`.

        Args:
            page: Page to capture
            test_name: Name of the visual test case (file name stem)
            timeout_ms: Time to let the UI settle before capturing
        """
        try:
            if not self.store.exists(test_name):
                await self._create_baseline(page, test_name, timeout_ms)
                return

            case = self.case_for(test_name)
            await page.wait_for_timeout(timeout_ms)
            await self.capture.capture(page, case.current_path)
            # Pixel comparison is CPU bound; keep it off the event loop.
            result = await asyncio.to_thread(
                self.differ.compare,
                case.baseline_path, case.current_path, case.diff_path, case.threshold
            )

            if not result.identical:
                logger.error(
                    f"Visual difference detected for {test_name}: "
                    f"{result.differing_pixel_count} pixel(s). "
                    f"Check {result.diff_artifact_path} for differences."
                )
                allure.attach.file(
                    str(result.diff_artifact_path),
                    name=f"{test_name}-diff",
                    attachment_type=allure.attachment_type.PNG,
                )
            else:
                logger.info(f"No visual difference detected for {test_name}.")
        except Exception as e:
            logger.error(f"Error while running visual tests for {test_name}: {e}")

    async def create_baseline_image(
        self,
        page: Page,
        test_name: str,
        timeout_ms: int = DEFAULT_SETTLE_TIMEOUT_MS,
    ) -> None:
        """Capture `page` and store it as the baseline if none exists yet."""
        try:
            await self._create_baseline(page, test_name, timeout_ms)
        except Exception as e:
            logger.error(f"Error while creating baseline image for {test_name}: {e}")

    async def _create_baseline(self, page: Page, test_name: str, timeout_ms: int) -> None:
        case = self.case_for(test_name)
        await page.wait_for_timeout(timeout_ms)
        await self.capture.capture(page, case.current_path)
        logger.info(
            f"No baseline image found for {test_name}. "
            f"Saving the current screenshot as baseline."
        )
        self.store.create_from(test_name, case.current_path)


__all__ = [
    "DEFAULT_SETTLE_TIMEOUT_MS",
    "VisualRegressionPipeline",
]
