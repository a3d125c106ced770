# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module provides the UI element interaction wrappers used by test steps.
# Every action resolves its element through ElementAccessor (translate ->
# wait -> query) and then delegates to the Playwright element handle.
#
# Key Features:
#   - Per-action failure policy table (fail-fast vs fail-soft)
#   - Allure step integration
#   - Keyboard and mouse actions
#   - Checkbox and dropdown convenience wrappers
#
# Failure policy:
#   FAIL_FAST  - a missing element raises ElementNotFoundError, engine errors
#                are logged and re-raised
#   FAIL_SOFT  - a missing element or engine error is logged and swallowed
#   InvalidSelectorError always propagates regardless of policy.
#
# ================================================================================

from enum import Enum
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import ElementHandle, Page
from playwright.async_api import Error as PlaywrightError

from .element_accessor import ElementAccessor, ElementNotFoundError
from .selector_translator import InvalidSelectorError
from .wait_engine import WaitState


class ElementPropertyError(Exception):
    """Raised when a DOM property read returns null or undefined."""
    pass


class FailurePolicy(str, Enum):
    """What an action does when its element is missing or the engine fails."""
    FAIL_FAST = "fail_fast"
    FAIL_SOFT = "fail_soft"


# Actions whose silent failure would corrupt later assertions fail fast;
# toggle-style convenience wrappers fail soft.
ACTION_POLICIES: Dict[str, FailurePolicy] = {
    "click": FailurePolicy.FAIL_FAST,
    "double_click": FailurePolicy.FAIL_FAST,
    "set_text": FailurePolicy.FAIL_FAST,
    "clear_text": FailurePolicy.FAIL_FAST,
    "key_press": FailurePolicy.FAIL_FAST,
    "get_text": FailurePolicy.FAIL_FAST,
    "get_property_value": FailurePolicy.FAIL_FAST,
    "mouse_hover": FailurePolicy.FAIL_FAST,
    "select_checkbox": FailurePolicy.FAIL_SOFT,
    "unselect_checkbox": FailurePolicy.FAIL_SOFT,
    "select_dropdown_option": FailurePolicy.FAIL_SOFT,
}

_HANDLED_ERRORS = (ElementNotFoundError, ElementPropertyError, PlaywrightError)


def element_action(action: str):
    """
    Decorator applying the action's failure policy and an Allure step.

    The policy is looked up in ACTION_POLICIES at call time.

    Args:
        action: Key into ACTION_POLICIES
    """
    if action not in ACTION_POLICIES:
        raise KeyError(f"No failure policy registered for action: {action}")

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(self, selector: str, *args, **kwargs):
            policy = ACTION_POLICIES[action]
            with allure.step(f"{action}: {selector}"):
                try:
                    return await func(self, selector, *args, **kwargs)
                except InvalidSelectorError:
                    logger.error(f"Invalid selector passed to {action}: '{selector}'")
                    raise
                except _HANDLED_ERRORS as e:
                    if policy is FailurePolicy.FAIL_SOFT:
                        logger.error(f"{action} skipped for '{selector}': {e}")
                        return None
                    logger.error(f"Error occurred during {action} on '{selector}': {e}")
                    raise

        wrapper.action = action
        return wrapper
    return decorator


class ElementActions:
    """
    Element interaction wrappers built on ElementAccessor.

    Example:
        actions = ElementActions(page)
        await actions.set_text("#username", "testuser")
        await actions.click("#submit-btn")
        await actions.select_checkbox("#remember-me")
    """

    def __init__(self, page: Page, accessor: Optional[ElementAccessor] = None):
        """
        Initialize ElementActions with a Playwright page.

        Args:
            page: Playwright Page object
            accessor: Shared accessor (a new one is built when omitted)
        """
        self.page = page
        self.accessor = accessor or ElementAccessor(page)

    async def _resolve(
        self,
        selector: str,
        action: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> ElementHandle:
        lookup = await self.accessor.get_element(selector, wait_state, timeout_ms)
        if lookup.timed_out and lookup.found:
            logger.warning(
                f"{action}: '{selector}' did not reach {wait_state.name}, acting on it anyway"
            )
        return lookup.require(action)

    # =========================================================================
    # Fail-fast actions
    # =========================================================================

    @element_action("click")
    async def click(
        self,
        selector: str,
        modifiers: Optional[List[str]] = None,
        button: str = "left",
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Click on an element.

        Args:
            selector: Logical selector
            modifiers: Keyboard modifiers to hold, e.g. ["Shift"]
            button: "left", "right" or "middle"
            wait_state: Readiness condition to wait for
            timeout_ms: Wait bound in milliseconds
        """
        handle = await self._resolve(selector, "click", wait_state, timeout_ms)
        await handle.click(modifiers=modifiers or [], button=button)
        logger.info(f"Clicked on element with selector '{selector}'.")

    @element_action("double_click")
    async def double_click(
        self,
        selector: str,
        button: str = "left",
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Double click on an element."""
        handle = await self._resolve(selector, "double_click", wait_state, timeout_ms)
        await handle.dblclick(button=button)
        logger.info(f"Double clicked on element with selector '{selector}'.")

    @element_action("set_text")
    async def set_text(
        self,
        selector: str,
        text: str,
        delay: int = 0,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Replace the element's text by clearing it and typing `text`.

        Args:
            selector: Logical selector
            text: Text to type
            delay: Delay between keystrokes in milliseconds
            timeout_ms: Wait bound in milliseconds
        """
        handle = await self._resolve(selector, "set_text", WaitState.VISIBLE, timeout_ms)
        await handle.fill("")
        await handle.type(text, delay=delay)
        logger.info(f"Typed the text on element with selector '{selector}'.")

    @element_action("clear_text")
    async def clear_text(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Clear the text content of an input element."""
        handle = await self._resolve(selector, "clear_text", wait_state, timeout_ms)
        await handle.fill("")
        logger.info(f"Cleared text in element with selector '{selector}'.")

    @element_action("key_press")
    async def key_press(
        self,
        selector: str,
        key: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Press and release a key on the element.

        Args:
            selector: Logical selector
            key: Key to press (e.g., "Enter", "Tab", "Escape")
        """
        handle = await self._resolve(selector, "key_press", wait_state, timeout_ms)
        await handle.press(key)
        logger.info(f"Pressed '{key}' in element with selector '{selector}'.")

    @element_action("get_text")
    async def get_text(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> str:
        """
        Get text content of an element.

        Returns:
            Text content of the element ("" when it has none)
        """
        handle = await self._resolve(selector, "get_text", wait_state, timeout_ms)
        text = await handle.text_content()
        logger.info(f"Successfully fetched the text content of the selector '{selector}'")
        return text or ""

    @element_action("get_property_value")
    async def get_property_value(
        self,
        selector: str,
        property_name: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> Any:
        """
        Read a DOM property (e.g. "value", "href") from the element.

        Raises:
            ElementPropertyError: The property is null or undefined
        """
        handle = await self._resolve(selector, "get_property_value", wait_state, timeout_ms)
        js_handle = await handle.get_property(property_name)
        value = await js_handle.json_value()
        if value is None:
            raise ElementPropertyError(
                f"Unable to fetch the property '{property_name}' for the element "
                f"with selector '{selector}'."
            )
        logger.info(
            f"Successfully fetched the property '{property_name}' value for element "
            f"with selector '{selector}'."
        )
        return value

    @element_action("mouse_hover")
    async def mouse_hover(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Hover the mouse over an element."""
        handle = await self._resolve(selector, "mouse_hover", wait_state, timeout_ms)
        await handle.hover()
        logger.info(f"Mouse hovered on element with selector: {selector}")

    # =========================================================================
    # Fail-soft convenience wrappers
    # =========================================================================

    @element_action("select_checkbox")
    async def select_checkbox(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Check a checkbox; logs instead of raising when it cannot."""
        handle = await self._resolve(selector, "select_checkbox", wait_state, timeout_ms)
        await handle.check()
        logger.info(f"Checkbox with selector '{selector}' has been selected.")

    @element_action("unselect_checkbox")
    async def unselect_checkbox(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Uncheck a checkbox; logs instead of raising when it cannot."""
        handle = await self._resolve(selector, "unselect_checkbox", wait_state, timeout_ms)
        await handle.uncheck()
        logger.info(f"Checkbox with selector '{selector}' has been unselected.")

    @element_action("select_dropdown_option")
    async def select_dropdown_option(
        self,
        selector: str,
        option: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Select a <select> option by value, falling back to its label.

        Args:
            selector: Logical selector of the <select> element
            option: Option value or visible label
        """
        handle = await self._resolve(selector, "select_dropdown_option", wait_state, timeout_ms)
        escaped = option.replace("\\", "\\\\").replace('"', '\\"')
        by_value = await handle.query_selector(f'option[value="{escaped}"]')
        if by_value is not None:
            await handle.select_option(value=option)
        else:
            await handle.select_option(label=option)
        logger.info(f"Selected option '{option}' from dropdown with selector '{selector}'.")


__all__ = [
    "ACTION_POLICIES",
    "ElementActions",
    "ElementPropertyError",
    "FailurePolicy",
    "element_action",
]
