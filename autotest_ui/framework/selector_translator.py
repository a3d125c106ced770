"""
================================================================================
Selector Translation
================================================================================

Maps logical selectors used in test steps onto concrete Playwright queries.

Supported syntaxes:
    - `#<id>`: short form resolved against the `data-testid` attribute
    - `//...` or `(...`: structural (XPath) query, passed through unchanged

Anything else is rejected with InvalidSelectorError; CSS, text and role
selectors are not accepted.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


TEST_ID_MARKER = "#"
TEST_ID_ATTRIBUTE = "data-testid"
STRUCTURAL_QUERY_PATTERN = re.compile(r"^(//|\()")


class InvalidSelectorError(ValueError):
    """Raised when a selector matches neither supported syntax."""

    def __init__(self, selector: object):
        self.selector = selector
        super().__init__(f"Invalid selector format: {selector!r}")


class SelectorStrategy(str, Enum):
    """How a logical selector was turned into a concrete query."""
    TEST_ID = "test_id"
    STRUCTURAL = "structural"


@dataclass(frozen=True)
class ConcreteQuery:
    """
    Result of translating a logical selector.

    Attributes:
        selector: The logical selector supplied by the caller
        query: Query string handed to the browser engine
        strategy: Which syntax the selector used
        value: Attribute value for TEST_ID queries (None for structural ones)
    """
    selector: str
    query: str
    strategy: SelectorStrategy
    value: Optional[str] = None

    def __str__(self) -> str:
        return self.query


def _css_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def translate(selector: str) -> ConcreteQuery:
    """
    Translate a logical selector into a concrete query.

    Args:
        selector: `#submit-btn` or an XPath such as `//button[@type='submit']`

    Returns:
        ConcreteQuery for the browser engine

    Raises:
        InvalidSelectorError: When the selector uses an unsupported syntax

    Examples:
        >>> translate("#submit-btn").query
        '[data-testid="submit-btn"]'
        >>> translate("(//li)[2]").query
        '(//li)[2]'
    """
    if not isinstance(selector, str):
        raise InvalidSelectorError(selector)

    if selector.startswith(TEST_ID_MARKER):
        value = selector[len(TEST_ID_MARKER):]
        return ConcreteQuery(
            selector=selector,
            query=f'[{TEST_ID_ATTRIBUTE}="{_css_string(value)}"]',
            strategy=SelectorStrategy.TEST_ID,
            value=value,
        )

    if STRUCTURAL_QUERY_PATTERN.match(selector):
        return ConcreteQuery(
            selector=selector,
            query=selector,
            strategy=SelectorStrategy.STRUCTURAL,
        )

    raise InvalidSelectorError(selector)


__all__ = [
    "ConcreteQuery",
    "InvalidSelectorError",
    "SelectorStrategy",
    "STRUCTURAL_QUERY_PATTERN",
    "TEST_ID_ATTRIBUTE",
    "translate",
]
