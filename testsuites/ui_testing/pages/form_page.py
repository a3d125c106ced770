"""
================================================================================
Demo Form Page Object
================================================================================

Self-contained page used by the real-browser suite. The markup is loaded with
`page.set_content`, so the suite needs a browser but no running application.

Elements carry `data-testid` attributes and are addressed with the `#<id>`
short form; the list items are addressed structurally.

================================================================================
"""

from __future__ import annotations

import allure

from autotest_ui.framework import BasePage


FORM_HTML = """
<!DOCTYPE html>
<html>
<head><title>Demo Form</title></head>
<body style="margin: 0; font-family: sans-serif;">
  <form data-testid="login-form"
        onsubmit="event.preventDefault();
                  document.querySelector('[data-testid=result]').textContent =
                      'Hello ' + document.querySelector('[data-testid=username]').value;">
    <input data-testid="username" type="text">
    <label><input data-testid="remember-me" type="checkbox"> Remember me</label>
    <select data-testid="language">
      <option value="en">English</option>
      <option value="fr">French</option>
    </select>
    <button data-testid="submit" type="submit">Submit</button>
    <button data-testid="archive" type="button" disabled>Archive</button>
  </form>
  <p data-testid="result"></p>
  <div data-testid="hidden-note" style="display: none">secret</div>
  <ul>
    <li>One</li>
    <li>Two</li>
    <li>Three</li>
  </ul>
  <script>
    setTimeout(function () {
      var banner = document.createElement('div');
      banner.setAttribute('data-testid', 'late-banner');
      banner.textContent = 'Loaded';
      document.body.appendChild(banner);
    }, 300);
  </script>
</body>
</html>
"""


class FormPage(BasePage):
    """Demo form page object (async)."""

    URL_PATH = "/form"
    PAGE_TITLE = "Demo Form"

    USERNAME = "#username"
    REMEMBER_ME = "#remember-me"
    LANGUAGE = "#language"
    SUBMIT = "#submit"
    ARCHIVE = "#archive"
    RESULT = "#result"
    HIDDEN_NOTE = "#hidden-note"
    LATE_BANNER = "#late-banner"
    LIST_ITEMS = "//li"

    async def load(self) -> "FormPage":
        """Render the demo markup into the current page."""
        with allure.step("Load demo form"):
            await self.page.set_content(FORM_HTML)
        return self

    async def submit_name(self, name: str) -> str:
        """Type `name`, submit and return the greeting."""
        with allure.step(f"Submit name (name={name})"):
            await self.set_text(self.USERNAME, name)
            await self.click(self.SUBMIT)
            return await self.get_text(self.RESULT)
