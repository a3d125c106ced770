"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation, title/URL access and viewport control
    - Element access and actions through logical selectors
    - Window/tab switching
    - Visual regression checks

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, List, Optional

import allure
from loguru import logger
from playwright.async_api import Browser, Page

from autotest_ui.common import get_config
from autotest_ui.visual import VisualRegressionPipeline

from .element_accessor import ElementAccessor, ElementLookup
from .element_actions import ElementActions
from .wait_engine import ElementWaitEngine, WaitResult, WaitState


class BasePage:
    """
    Base class for all page objects.

    Provides common functionality for:
        - Navigation and URL handling
        - Element interaction via `#test-id` / XPath selectors
        - Window handling
        - Visual regression checks

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"

            async def login(self, username: str, password: str):
                await self.set_text("#input-username", username)
                await self.set_text("#input-password", password)
                await self.click("#btn-login")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        browser: Optional[Browser] = None,
        visual: Optional[VisualRegressionPipeline] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (`ui.base_url` when empty)
            browser: Owning browser, needed only for `quit()`
            visual: Visual pipeline (built lazily from configuration when None)
        """
        self.page = page
        self.browser = browser
        self.base_url = (base_url or get_config("ui.base_url", "http://localhost:3000")).rstrip("/")
        self.waits = ElementWaitEngine(page)
        self.elements = ElementAccessor(page, self.waits)
        self.actions = ElementActions(page, self.elements)
        self._visual = visual

    def _bind(self, page: Page) -> None:
        self.page = page
        self.waits = ElementWaitEngine(page)
        self.elements = ElementAccessor(page, self.waits)
        self.actions = ElementActions(page, self.elements)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def visual(self) -> VisualRegressionPipeline:
        if self._visual is None:
            self._visual = VisualRegressionPipeline()
        return self._visual

    # =========================================================================
    # Navigation
    # =========================================================================

    async def open(self, url: str) -> None:
        """
        Open the specified URL in the current page.

        Navigation errors are logged, not raised.
        """
        try:
            await self.page.goto(url)
            logger.info(f"Opened URL: {url}")
        except Exception as e:
            logger.error(f"Error occurred while opening the URL: {e}")

    async def navigate(self, wait_for: str = "networkidle") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.page.goto(self.url, wait_until=wait_for)
            logger.debug(f"Navigated to: {self.url}")

    async def close(self) -> None:
        """Close the current window."""
        try:
            await self.page.close()
            logger.info("Successfully closed the window")
        except Exception as e:
            logger.error(f"Error occurred while closing the window: {e}")
            raise

    async def quit(self) -> None:
        """Close the owning browser; errors are logged only."""
        if self.browser is None:
            logger.warning("quit() called without a browser; nothing to close")
            return
        try:
            await self.browser.close()
            logger.info("Successfully closed the browser")
        except Exception as e:
            logger.error(f"Error occurred while closing the browser: {e}")

    async def get_page_title(self) -> str:
        """Wait for the load event and return the page title."""
        return await self.get_specific_page_title(self.page)

    async def get_specific_page_title(self, page: Page) -> str:
        """Wait for the load event on `page` and return its title."""
        try:
            await page.wait_for_load_state("load")
            title = await page.title()
            logger.info(f"Page title: {title}")
            return title
        except Exception as e:
            logger.error(f"Error occurred while retrieving page title: {e}")
            raise

    async def get_current_url(self) -> str:
        url = self.page.url
        logger.info(f"Current URL: {url}")
        return url

    async def set_viewport(self, width: int, height: int) -> None:
        """Resize the viewport; failures are logged, not raised."""
        try:
            await self.page.set_viewport_size({"width": width, "height": height})
            logger.info(f"Screen resolution set successfully to {width}x{height}")
        except Exception as e:
            logger.error(f"Unable to set the viewport: {e}")

    async def wait_for(self, ms: int) -> None:
        """Sleep for `ms` milliseconds using the page clock."""
        await self.page.wait_for_timeout(ms)
        logger.info(f"Waited for {ms} milliseconds")

    # =========================================================================
    # Windows
    # =========================================================================

    async def get_all_windows(self) -> List[Page]:
        """
        Wait for a popup opened by the current page.

        Returns:
            All pages of the current browser context once the popup has loaded
        """
        popup = await self.page.wait_for_event("popup")
        await popup.wait_for_load_state()
        pages = list(self.page.context.pages)
        logger.info(f"{len(pages)} window(s) open")
        return pages

    async def switch_to_window(self, target: Page) -> None:
        """
        Bring `target` to front and route all further calls to it.

        Raises:
            LookupError: `target` is not a window of the current context
        """
        if target not in self.page.context.pages:
            logger.error(f"Target window not found: {target.url}")
            raise LookupError("Target window not found")
        await target.bring_to_front()
        self._bind(target)
        logger.info(f"Switched to window: {target.url}")

    async def switch_to_child_window(self) -> Page:
        """
        Switch to the most recently opened window other than the current one.

        Raises:
            LookupError: No child window is open
        """
        children = [p for p in self.page.context.pages if p is not self.page]
        if not children:
            logger.error("Child window not found")
            raise LookupError("Child window not found")
        child = children[-1]
        await self.switch_to_window(child)
        return child

    # =========================================================================
    # Elements
    # =========================================================================

    async def wait_for_element_state(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> WaitResult:
        return await self.waits.wait_for_element_state(selector, wait_state, timeout_ms)

    async def get_element(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> ElementLookup:
        return await self.elements.get_element(selector, wait_state, timeout_ms)

    async def get_elements(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> list:
        return await self.elements.get_elements(selector, wait_state, timeout_ms)

    async def is_element_present(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        return await self.elements.is_element_present(selector, timeout_ms)

    async def is_element_visible(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        return await self.elements.is_element_visible(selector, timeout_ms)

    async def is_element_enabled(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        return await self.elements.is_element_enabled(selector, timeout_ms)

    async def is_element_checked(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        return await self.elements.is_element_checked(selector, timeout_ms)

    # =========================================================================
    # Element Actions
    # =========================================================================

    async def click(self, selector: str, **kwargs: Any) -> None:
        await self.actions.click(selector, **kwargs)

    async def double_click(self, selector: str, **kwargs: Any) -> None:
        await self.actions.double_click(selector, **kwargs)

    async def set_text(self, selector: str, text: str, **kwargs: Any) -> None:
        await self.actions.set_text(selector, text, **kwargs)

    async def clear_text(self, selector: str, **kwargs: Any) -> None:
        await self.actions.clear_text(selector, **kwargs)

    async def key_press(self, selector: str, key: str, **kwargs: Any) -> None:
        await self.actions.key_press(selector, key, **kwargs)

    async def get_text(self, selector: str, **kwargs: Any) -> str:
        return await self.actions.get_text(selector, **kwargs)

    async def get_property_value(self, selector: str, property_name: str, **kwargs: Any) -> Any:
        return await self.actions.get_property_value(selector, property_name, **kwargs)

    async def mouse_hover(self, selector: str, **kwargs: Any) -> None:
        await self.actions.mouse_hover(selector, **kwargs)

    async def select_checkbox(self, selector: str, **kwargs: Any) -> None:
        await self.actions.select_checkbox(selector, **kwargs)

    async def unselect_checkbox(self, selector: str, **kwargs: Any) -> None:
        await self.actions.unselect_checkbox(selector, **kwargs)

    async def select_dropdown_option(self, selector: str, option: str, **kwargs: Any) -> None:
        await self.actions.select_dropdown_option(selector, option, **kwargs)

    # =========================================================================
    # Visual checks
    # =========================================================================

    async def run_visual_test(self, test_name: str, timeout_ms: Optional[int] = None) -> None:
        """Run the visual regression check for `test_name` on this page."""
        if timeout_ms is None:
            timeout_ms = get_config("visual.settle_timeout_ms", 2000)
        with allure.step(f"Visual check: {test_name}"):
            await self.visual.run_visual_test(self.page, test_name, timeout_ms)


__all__ = [
    "BasePage",
]
