"""
================================================================================
Element Interaction UI Tests (Async / Playwright)
================================================================================

Drives the demo form in a real browser through BasePage: `#test-id` and XPath
selectors, bounded waits, state checks and the action wrappers.

================================================================================
"""

import allure
import pytest

from autotest_ui.framework import ElementNotFoundError, WaitOutcome, WaitState
from testsuites.ui_testing.pages import FormPage


@allure.epic("UI Testing")
@allure.feature("Element Interaction")
class TestFormInteractions:
    """Demo form test suite (async)."""

    @allure.story("Happy Path")
    @allure.title("Typed name is submitted and greeted")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    async def test_submit_name(self, form_page: FormPage):
        assert await form_page.get_page_title() == FormPage.PAGE_TITLE

        greeting = await form_page.submit_name("alice")

        assert greeting == "Hello alice"
        assert await form_page.get_property_value(FormPage.USERNAME, "value") == "alice"

    @allure.story("Text Input")
    @allure.title("set_text replaces existing text")
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_set_text_replaces_value(self, form_page: FormPage):
        await form_page.set_text(FormPage.USERNAME, "first")
        await form_page.set_text(FormPage.USERNAME, "second")
        assert await form_page.get_property_value(FormPage.USERNAME, "value") == "second"

        await form_page.clear_text(FormPage.USERNAME)
        assert await form_page.get_property_value(FormPage.USERNAME, "value") == ""

    @allure.story("Checkbox")
    @allure.title("Checkbox can be selected and unselected")
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_checkbox(self, form_page: FormPage):
        await form_page.select_checkbox(FormPage.REMEMBER_ME)
        assert await form_page.is_element_checked(FormPage.REMEMBER_ME) is True

        await form_page.unselect_checkbox(FormPage.REMEMBER_ME)
        assert await form_page.is_element_checked(FormPage.REMEMBER_ME) is False

    @allure.story("Dropdown")
    @allure.title("Dropdown option is selected by value or label")
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_dropdown(self, form_page: FormPage):
        await form_page.select_dropdown_option(FormPage.LANGUAGE, "French")
        assert await form_page.get_property_value(FormPage.LANGUAGE, "value") == "fr"

        await form_page.select_dropdown_option(FormPage.LANGUAGE, "en")
        assert await form_page.get_property_value(FormPage.LANGUAGE, "value") == "en"

    @allure.story("Element State")
    @allure.title("Enabled and present checks reflect the DOM")
    @pytest.mark.P2
    @pytest.mark.regression
    async def test_element_state_checks(self, form_page: FormPage):
        assert await form_page.is_element_enabled(FormPage.SUBMIT) is True
        assert await form_page.is_element_enabled(FormPage.ARCHIVE) is False
        assert await form_page.is_element_present(FormPage.HIDDEN_NOTE) is True
        assert await form_page.is_element_present("#does-not-exist", timeout_ms=200) is False

    @allure.story("Structural Selectors")
    @allure.title("XPath selectors resolve lists and positions")
    @pytest.mark.P2
    @pytest.mark.regression
    async def test_xpath_selectors(self, form_page: FormPage):
        assert len(await form_page.get_elements(FormPage.LIST_ITEMS)) == 3
        assert await form_page.get_text("(//li)[2]") == "Two"

    @allure.story("Waiting")
    @allure.title("Waits report reached and timed-out outcomes")
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_wait_outcomes(self, form_page: FormPage):
        late = await form_page.wait_for_element_state(FormPage.LATE_BANNER, WaitState.VISIBLE, 5000)
        hidden = await form_page.wait_for_element_state(FormPage.HIDDEN_NOTE, WaitState.INVISIBLE, 5000)
        never = await form_page.wait_for_element_state("#never-rendered", WaitState.VISIBLE, 200)

        assert late.outcome is WaitOutcome.REACHED
        assert hidden.outcome is WaitOutcome.REACHED
        assert never.outcome is WaitOutcome.TIMED_OUT
        assert await form_page.get_text(FormPage.LATE_BANNER) == "Loaded"

    @allure.story("Negative Path")
    @allure.title("Fail-fast action raises for a missing element")
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_click_missing_element_raises(self, form_page: FormPage):
        with pytest.raises(ElementNotFoundError):
            await form_page.click("#missing-button", timeout_ms=200)
