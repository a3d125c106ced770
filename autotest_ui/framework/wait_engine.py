"""
================================================================================
Element Wait Engine
================================================================================

Waits for an element to reach a readiness state under a bounded timeout.

Each wait races two operations:
    - the browser engine's own condition poll (`page.wait_for_selector`)
    - a plain timer for the requested timeout

Control returns as soon as either finishes and the loser is cancelled.
A timeout is NOT an error: the caller receives WaitOutcome.TIMED_OUT and
decides for itself whether that is fatal. Only invalid selectors and engine
faults (closed page, crashed browser) raise.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from autotest_ui.common import get_config

from .selector_translator import ConcreteQuery, translate


DEFAULT_TIMEOUT_MS = 30000


class WaitState(Enum):
    """Readiness condition requested for an element (value = Playwright state)."""
    PRESENT = "attached"
    VISIBLE = "visible"
    INVISIBLE = "hidden"


class WaitOutcome(Enum):
    """Which side of the race finished first."""
    REACHED = "reached"
    TIMED_OUT = "timed_out"


def resolve_timeout(timeout_ms: Optional[int]) -> int:
    """Fall back to the configured default for missing or non-positive timeouts."""
    if timeout_ms is None or timeout_ms <= 0:
        return int(get_config("ui.default_timeout_ms", DEFAULT_TIMEOUT_MS))
    return int(timeout_ms)


@dataclass(frozen=True)
class WaitRequest:
    """
    A single wait.

    Attributes:
        selector: Logical selector (see selector_translator)
        wait_state: Target readiness condition
        timeout_ms: Upper bound in milliseconds; None or <= 0 means default
    """
    selector: str
    wait_state: WaitState = WaitState.VISIBLE
    timeout_ms: Optional[int] = None

    @property
    def effective_timeout_ms(self) -> int:
        return resolve_timeout(self.timeout_ms)


@dataclass(frozen=True)
class WaitResult:
    """Outcome of a wait plus the query it resolved, for reuse by the caller."""
    outcome: WaitOutcome
    query: ConcreteQuery
    timeout_ms: int
    elapsed_ms: float

    @property
    def reached(self) -> bool:
        return self.outcome is WaitOutcome.REACHED


class ElementWaitEngine:
    """
    Race-based element waiting bound to one Playwright page.

    Usage:
        >>> engine = ElementWaitEngine(page)
        >>> result = await engine.wait(WaitRequest("#submit-btn", WaitState.VISIBLE, 5000))
        >>> if not result.reached:
        ...     logger.warning("carry on anyway")
    """

    def __init__(self, page: Page):
        self.page = page

    async def wait(self, request: WaitRequest) -> WaitResult:
        """
        Wait until the element reaches `request.wait_state` or the timeout elapses.

        Raises:
            InvalidSelectorError: Selector cannot be translated
            playwright.async_api.Error: Engine fault while polling
        """
        query = translate(request.selector)
        timeout_ms = request.effective_timeout_ms
        started = time.monotonic()

        condition = asyncio.ensure_future(
            self.page.wait_for_selector(
                query.query,
                state=request.wait_state.value,
                timeout=timeout_ms,
            )
        )
        timer = asyncio.ensure_future(asyncio.sleep(timeout_ms / 1000))

        try:
            done, _ = await asyncio.wait(
                {condition, timer}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            await self._cancel(condition, timer)

        outcome = WaitOutcome.TIMED_OUT
        if condition in done:
            try:
                condition.result()
                outcome = WaitOutcome.REACHED
            except PlaywrightTimeoutError:
                # Engine-side bound expired together with the timer.
                outcome = WaitOutcome.TIMED_OUT

        elapsed_ms = (time.monotonic() - started) * 1000
        if outcome is WaitOutcome.REACHED:
            logger.info(
                f"Element '{request.selector}' reached state "
                f"{request.wait_state.name} in {elapsed_ms:.0f} ms"
            )
        else:
            logger.warning(
                f"Element '{request.selector}' did not reach state "
                f"{request.wait_state.name} within {timeout_ms} ms; continuing"
            )

        return WaitResult(
            outcome=outcome,
            query=query,
            timeout_ms=timeout_ms,
            elapsed_ms=elapsed_ms,
        )

    async def wait_for_element_state(
        self,
        selector: str,
        wait_state: WaitState = WaitState.VISIBLE,
        timeout_ms: Optional[int] = None,
    ) -> WaitResult:
        """Convenience wrapper building the WaitRequest."""
        return await self.wait(WaitRequest(selector, wait_state, timeout_ms))

    @staticmethod
    async def _cancel(*tasks: asyncio.Future) -> None:
        """Cancel unfinished tasks and wait for them so nothing keeps polling."""
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "ElementWaitEngine",
    "WaitOutcome",
    "WaitRequest",
    "WaitResult",
    "WaitState",
    "resolve_timeout",
]
