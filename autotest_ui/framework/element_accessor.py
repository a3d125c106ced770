"""
================================================================================
Element Accessor
================================================================================

Resolves logical selectors into live Playwright element handles.

Every lookup first waits via ElementWaitEngine and then performs exactly one
concrete query. Handles are never cached: each call re-resolves against the
live DOM so callers never act on a stale node.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger
from playwright.async_api import ElementHandle, Page

from .selector_translator import ConcreteQuery
from .wait_engine import (
    ElementWaitEngine,
    WaitOutcome,
    WaitRequest,
    WaitState,
)


class ElementNotFoundError(Exception):
    """Raised when an element required by an action cannot be resolved."""

    def __init__(self, selector: str, action: str = ""):
        self.selector = selector
        self.action = action
        detail = f" for '{action}'" if action else ""
        super().__init__(f"Element with selector '{selector}' not found{detail}.")


@dataclass(frozen=True)
class ElementLookup:
    """
    Result of a single-element lookup.

    `handle` is None when nothing matched; use `found` or `require()` rather
    than testing the handle directly.
    """
    selector: str
    query: ConcreteQuery
    outcome: WaitOutcome
    handle: Optional[ElementHandle] = None

    @property
    def found(self) -> bool:
        return self.handle is not None

    @property
    def timed_out(self) -> bool:
        return self.outcome is WaitOutcome.TIMED_OUT

    def require(self, action: str = "") -> ElementHandle:
        """Return the handle or raise ElementNotFoundError."""
        if self.handle is None:
            raise ElementNotFoundError(self.selector, action)
        return self.handle


class ElementAccessor:
    """
    Element resolution and boolean state checks for one page.

    Usage:
        >>> accessor = ElementAccessor(page)
        >>> lookup = await accessor.get_element("#submit-btn")
        >>> if lookup.found:
        ...     await lookup.handle.click()
    """

    def __init__(self, page: Page, wait_engine: Optional[ElementWaitEngine] = None):
        self.page = page
        self.wait_engine = wait_engine or ElementWaitEngine(page)

    async def get_element(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> ElementLookup:
        """
        Wait for the element and return the first match.

        Args:
            selector: Logical selector
            wait_state: Readiness condition to wait for
            timeout_ms: Wait bound; default timeout when None

        Returns:
            ElementLookup, with `handle=None` when nothing matched
        """
        result = await self.wait_engine.wait(WaitRequest(selector, wait_state, timeout_ms))
        handle = await self.page.query_selector(result.query.query)

        if handle is not None:
            logger.info(f"Element with selector '{result.query}' has been found.")
        else:
            logger.info(f"No element matched selector '{result.query}'.")

        return ElementLookup(
            selector=selector,
            query=result.query,
            outcome=result.outcome,
            handle=handle,
        )

    async def get_elements(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> List[ElementHandle]:
        """
        Wait for the element and return every match (possibly empty).
        """
        result = await self.wait_engine.wait(WaitRequest(selector, wait_state, timeout_ms))
        handles = await self.page.query_selector_all(result.query.query)
        logger.info(f"{len(handles)} element(s) found for selector '{result.query}'.")
        return list(handles)

    # =========================================================================
    # Boolean state checks
    # =========================================================================

    async def is_element_present(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        """Return True when at least one element is attached to the DOM."""
        lookup = await self.get_element(selector, WaitState.PRESENT, timeout_ms)
        if lookup.found:
            logger.info(f"Element with selector '{selector}' is present.")
            return True
        logger.error(f"Element with selector '{selector}' was not present.")
        return False

    async def is_element_visible(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        """
        Return the element's visibility.

        Raises:
            ElementNotFoundError: Element could not be resolved at all
        """
        handle = (await self.get_element(selector, WaitState.VISIBLE, timeout_ms)).require("is_element_visible")
        visible = await handle.is_visible()
        if visible:
            logger.info(f"Element with selector '{selector}' is visible.")
        else:
            logger.error(f"Element with selector '{selector}' was not visible.")
        return bool(visible)

    async def is_element_enabled(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        """
        Return whether the element is enabled.

        Raises:
            ElementNotFoundError: Element could not be resolved at all
        """
        handle = (await self.get_element(selector, WaitState.VISIBLE, timeout_ms)).require("is_element_enabled")
        enabled = await handle.is_enabled()
        logger.info(
            f"Element with selector '{selector}' is {'enabled' if enabled else 'disabled'}."
        )
        return bool(enabled)

    async def is_element_checked(self, selector: str, timeout_ms: Optional[int] = None) -> bool:
        """
        Return the element's `checked` DOM property (False when it has none).

        Raises:
            ElementNotFoundError: Element could not be resolved at all
        """
        handle = (await self.get_element(selector, WaitState.VISIBLE, timeout_ms)).require("is_element_checked")
        checked = await handle.evaluate("(el) => el.checked === true")
        logger.info(
            f"Element with selector '{selector}' is {'checked' if checked else 'not checked'}."
        )
        return bool(checked)


__all__ = [
    "ElementAccessor",
    "ElementLookup",
    "ElementNotFoundError",
]
