from playwright.async_api import Error as PlaywrightError
import pytest
from PIL import Image

from autotest_ui.visual.screenshot_capture import ScreenshotCapture


async def test_capture_writes_png_to_destination(page, tmp_path):
    destination = tmp_path / "nested" / "dir" / "home.png"

    written = await ScreenshotCapture().capture(page, destination)

    assert written == destination
    with Image.open(destination) as img:
        assert img.size == page.screenshot_size


async def test_capture_errors_propagate(page, tmp_path):
    page.screenshot_error = PlaywrightError("Target page, context or browser has been closed")

    with pytest.raises(PlaywrightError):
        await ScreenshotCapture().capture(page, tmp_path / "home.png")
