"""
In-memory stand-ins for the parts of the Playwright async API the core uses.

FakePage.wait_for_selector resolves after `ready_after` seconds for queries
registered through `add()` and otherwise never resolves, so the wait engine's
timer decides the race. Cancellation of the poll is recorded.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image


class FakeJSHandle:
    def __init__(self, value: Any):
        self._value = value

    async def json_value(self) -> Any:
        return self._value


class FakeElement:
    """Element handle recording every interaction in `calls`."""

    def __init__(
        self,
        text: Optional[str] = "",
        visible: bool = True,
        enabled: bool = True,
        checked: Any = False,
        properties: Optional[Dict[str, Any]] = None,
        options: Optional[List[Tuple[str, str]]] = None,
        fail_with: Optional[Exception] = None,
    ):
        self.text = text
        self.visible = visible
        self.enabled = enabled
        self.checked = checked
        self.properties = properties or {}
        self.options = options or []
        self.fail_with = fail_with
        self.calls: List[Tuple[str, Any]] = []

    def _record(self, name: str, payload: Any = None) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((name, payload))

    async def click(self, **kwargs):
        self._record("click", kwargs)

    async def dblclick(self, **kwargs):
        self._record("dblclick", kwargs)

    async def fill(self, value: str):
        self._record("fill", value)

    async def type(self, text: str, delay: int = 0):
        self._record("type", {"text": text, "delay": delay})

    async def press(self, key: str):
        self._record("press", key)

    async def hover(self):
        self._record("hover")

    async def check(self):
        self._record("check")
        self.checked = True

    async def uncheck(self):
        self._record("uncheck")
        self.checked = False

    async def select_option(self, value=None, label=None):
        self._record("select_option", {"value": value, "label": label})

    async def text_content(self) -> Optional[str]:
        self._record("text_content")
        return self.text

    async def get_property(self, name: str) -> FakeJSHandle:
        self._record("get_property", name)
        return FakeJSHandle(self.properties.get(name))

    async def is_visible(self) -> bool:
        return self.visible

    async def is_enabled(self) -> bool:
        return self.enabled

    async def evaluate(self, expression: str) -> Any:
        # Only the checked-state expression is evaluated by the core.
        return self.checked is True

    async def query_selector(self, query: str) -> Optional["FakeElement"]:
        for value, label in self.options:
            if query == f'option[value="{value}"]':
                return FakeElement(text=label)
        return None


class FakeContext:
    def __init__(self):
        self.pages: List["FakePage"] = []


class FakePage:
    """Page double driving the wait engine, accessor, actions and capture."""

    def __init__(self, context: Optional[FakeContext] = None, url: str = "about:blank", title: str = ""):
        self.context = context or FakeContext()
        self.context.pages.append(self)
        self.url = url
        self._title = title
        self.elements: Dict[str, List[FakeElement]] = {}
        self.ready_after: Dict[str, float] = {}
        self.engine_error: Optional[Exception] = None
        self.wait_calls: List[Tuple[str, str, int]] = []
        self.cancelled: List[str] = []
        self.timeouts_waited: List[int] = []
        self.screenshots: List[Path] = []
        self.screenshot_size: Tuple[int, int] = (20, 20)
        self.screenshot_color: Tuple[int, int, int] = (255, 255, 255)
        self.screenshot_error: Optional[Exception] = None
        self.goto_error: Optional[Exception] = None
        self.visited: List[str] = []
        self.viewport: Optional[Dict[str, int]] = None
        self.closed = False
        self.brought_to_front = False
        self.popup: Optional["FakePage"] = None

    def add(self, query: str, *elements: FakeElement, ready_after: float = 0.0) -> None:
        """Register elements for `query` and make the wait resolve after `ready_after` s."""
        self.elements.setdefault(query, []).extend(elements)
        self.ready_after[query] = ready_after

    # --- waiting ---------------------------------------------------------

    async def wait_for_selector(self, query: str, state: str = "visible", timeout: int = 30000):
        self.wait_calls.append((query, state, timeout))
        if self.engine_error is not None:
            raise self.engine_error
        try:
            if query in self.ready_after:
                await asyncio.sleep(self.ready_after[query])
                matches = self.elements.get(query) or [None]
                return matches[0]
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled.append(query)
            raise

    async def wait_for_timeout(self, timeout: int) -> None:
        self.timeouts_waited.append(timeout)

    async def wait_for_load_state(self, state: str = "load") -> None:
        return None

    async def wait_for_event(self, event: str) -> "FakePage":
        assert event == "popup"
        self.popup = FakePage(self.context, url="about:popup")
        return self.popup

    # --- queries ---------------------------------------------------------

    async def query_selector(self, query: str) -> Optional[FakeElement]:
        matches = self.elements.get(query)
        return matches[0] if matches else None

    async def query_selector_all(self, query: str) -> List[FakeElement]:
        return list(self.elements.get(query, []))

    # --- page level --------------------------------------------------------

    async def screenshot(self, path: str = None, full_page: bool = False) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        Image.new("RGBA", self.screenshot_size, self.screenshot_color + (255,)).save(path, format="PNG")
        self.screenshots.append(Path(path))
        return b""

    async def goto(self, url: str, wait_until: str = "load") -> None:
        if self.goto_error is not None:
            raise self.goto_error
        self.visited.append(url)
        self.url = url

    async def title(self) -> str:
        return self._title

    async def set_viewport_size(self, viewport_size: Dict[str, int]) -> None:
        self.viewport = viewport_size

    async def bring_to_front(self) -> None:
        self.brought_to_front = True

    async def close(self) -> None:
        self.closed = True
        self.context.pages.remove(self)


def query_for(value: str) -> str:
    """Concrete query produced for `#value`."""
    return f'[data-testid="{value}"]'


def messages(records: List[Dict], level: str) -> List[str]:
    """Messages of captured loguru records at `level`."""
    return [r["message"] for r in records if r["level"].name == level]
