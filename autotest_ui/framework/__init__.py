"""
================================================================================
UI Automation Framework
================================================================================

Playwright-based UI automation core.

Components:
    - selector_translator: `#test-id` / XPath selectors to engine queries
    - wait_engine: Bounded waits for element states
    - element_accessor: Element lookup and state checks
    - element_actions: Element actions under a per-action failure policy
    - page_base: Base page object combining the above
    - browser_manager: Browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .selector_translator import ConcreteQuery, InvalidSelectorError, SelectorStrategy, translate
from .wait_engine import ElementWaitEngine, WaitOutcome, WaitRequest, WaitResult, WaitState
from .element_accessor import ElementAccessor, ElementLookup, ElementNotFoundError
from .element_actions import (
    ACTION_POLICIES,
    ElementActions,
    ElementPropertyError,
    FailurePolicy,
)
from .page_base import BasePage
from .browser_manager import BrowserManager

__all__ = [
    "ACTION_POLICIES",
    "BasePage",
    "BrowserManager",
    "ConcreteQuery",
    "ElementAccessor",
    "ElementActions",
    "ElementLookup",
    "ElementNotFoundError",
    "ElementPropertyError",
    "ElementWaitEngine",
    "FailurePolicy",
    "InvalidSelectorError",
    "SelectorStrategy",
    "WaitOutcome",
    "WaitRequest",
    "WaitResult",
    "WaitState",
    "translate",
]
