import inspect

from playwright.async_api import Error as PlaywrightError
import pytest

from autotest_ui.framework.element_accessor import ElementNotFoundError
from autotest_ui.framework.element_actions import (
    ACTION_POLICIES,
    ElementActions,
    ElementPropertyError,
    FailurePolicy,
    element_action,
)
from autotest_ui.framework.selector_translator import InvalidSelectorError
from testsuites.unit.fakes import FakeElement, messages, query_for


FAIL_FAST_ACTIONS = {
    "click", "double_click", "set_text", "clear_text", "key_press",
    "get_text", "get_property_value", "mouse_hover",
}
FAIL_SOFT_ACTIONS = {"select_checkbox", "unselect_checkbox", "select_dropdown_option"}

ACTION_ARGS = {
    "set_text": ("hello",),
    "key_press": ("Enter",),
    "get_property_value": ("value",),
    "select_dropdown_option": ("en",),
}


def test_policy_table_matches_action_classes():
    assert {a for a, p in ACTION_POLICIES.items() if p is FailurePolicy.FAIL_FAST} == FAIL_FAST_ACTIONS
    assert {a for a, p in ACTION_POLICIES.items() if p is FailurePolicy.FAIL_SOFT} == FAIL_SOFT_ACTIONS


def test_every_action_wrapper_is_registered_in_policy_table():
    wrapped = {
        member.action
        for _, member in inspect.getmembers(ElementActions, inspect.isfunction)
        if hasattr(member, "action")
    }
    assert wrapped == set(ACTION_POLICIES)


def test_unknown_action_cannot_be_decorated():
    with pytest.raises(KeyError):
        element_action("drag_and_drop")


async def test_click_delegates_to_handle(page):
    button = FakeElement()
    page.add(query_for("save"), button)

    await ElementActions(page).click("#save", modifiers=["Shift"], timeout_ms=1000)

    assert button.calls == [("click", {"modifiers": ["Shift"], "button": "left"})]


async def test_double_click_and_hover(page):
    item = FakeElement()
    page.add("//li[1]", item)
    actions = ElementActions(page)

    await actions.double_click("//li[1]", timeout_ms=1000)
    await actions.mouse_hover("//li[1]", timeout_ms=1000)

    assert [name for name, _ in item.calls] == ["dblclick", "hover"]


async def test_set_text_clears_then_types(page):
    field = FakeElement()
    page.add(query_for("username"), field)

    await ElementActions(page).set_text("#username", "testuser", delay=5, timeout_ms=1000)

    assert field.calls == [("fill", ""), ("type", {"text": "testuser", "delay": 5})]


async def test_clear_text_and_key_press(page):
    field = FakeElement()
    page.add(query_for("search"), field)
    actions = ElementActions(page)

    await actions.clear_text("#search", timeout_ms=1000)
    await actions.key_press("#search", "Enter", timeout_ms=1000)

    assert field.calls == [("fill", ""), ("press", "Enter")]


async def test_get_text_returns_empty_string_for_missing_content(page):
    page.add(query_for("title"), FakeElement(text="Welcome"))
    page.add(query_for("empty"), FakeElement(text=None))
    actions = ElementActions(page)

    assert await actions.get_text("#title", timeout_ms=1000) == "Welcome"
    assert await actions.get_text("#empty", timeout_ms=1000) == ""


async def test_get_property_value(page):
    page.add(query_for("email"), FakeElement(properties={"value": "a@b.c"}))

    assert await ElementActions(page).get_property_value("#email", "value", timeout_ms=1000) == "a@b.c"


async def test_get_property_value_raises_on_null_property(page):
    page.add(query_for("email"), FakeElement())

    with pytest.raises(ElementPropertyError, match="placeholder"):
        await ElementActions(page).get_property_value("#email", "placeholder", timeout_ms=1000)


@pytest.mark.parametrize("action", sorted(FAIL_FAST_ACTIONS))
async def test_fail_fast_actions_raise_for_missing_element(page, action):
    method = getattr(ElementActions(page), action)

    with pytest.raises(ElementNotFoundError):
        await method("#ghost", *ACTION_ARGS.get(action, ()), timeout_ms=50)


@pytest.mark.parametrize("action", sorted(FAIL_SOFT_ACTIONS))
async def test_fail_soft_actions_log_and_continue_for_missing_element(page, log_records, action):
    method = getattr(ElementActions(page), action)

    result = await method("#ghost", *ACTION_ARGS.get(action, ()), timeout_ms=50)

    assert result is None
    assert any("#ghost" in m for m in messages(log_records, "ERROR"))


async def test_fail_fast_action_reraises_engine_errors(page):
    page.add(query_for("save"), FakeElement(fail_with=PlaywrightError("Element is not attached to the DOM")))

    with pytest.raises(PlaywrightError):
        await ElementActions(page).click("#save", timeout_ms=1000)


async def test_fail_soft_action_swallows_engine_errors(page, log_records):
    page.add(query_for("terms"), FakeElement(fail_with=PlaywrightError("Element is not attached to the DOM")))

    await ElementActions(page).select_checkbox("#terms", timeout_ms=1000)

    assert any("select_checkbox" in m for m in messages(log_records, "ERROR"))


@pytest.mark.parametrize("action", sorted(FAIL_SOFT_ACTIONS))
async def test_invalid_selector_propagates_even_for_fail_soft_actions(page, action):
    method = getattr(ElementActions(page), action)

    with pytest.raises(InvalidSelectorError):
        await method("input.terms", *ACTION_ARGS.get(action, ()))


async def test_checkbox_wrappers(page):
    box = FakeElement(checked=False)
    page.add(query_for("remember-me"), box)
    actions = ElementActions(page)

    await actions.select_checkbox("#remember-me", timeout_ms=1000)
    assert box.checked is True

    await actions.unselect_checkbox("#remember-me", timeout_ms=1000)
    assert box.checked is False


async def test_dropdown_selects_by_value_when_option_value_exists(page):
    dropdown = FakeElement(options=[("en", "English"), ("fr", "French")])
    page.add(query_for("language"), dropdown)

    await ElementActions(page).select_dropdown_option("#language", "fr", timeout_ms=1000)

    assert dropdown.calls[-1] == ("select_option", {"value": "fr", "label": None})


async def test_dropdown_falls_back_to_label(page):
    dropdown = FakeElement(options=[("en", "English"), ("fr", "French")])
    page.add(query_for("language"), dropdown)

    await ElementActions(page).select_dropdown_option("#language", "French", timeout_ms=1000)

    assert dropdown.calls[-1] == ("select_option", {"value": None, "label": "French"})


async def test_policy_is_read_at_call_time(page, monkeypatch):
    monkeypatch.setitem(ACTION_POLICIES, "click", FailurePolicy.FAIL_SOFT)

    assert await ElementActions(page).click("#ghost", timeout_ms=50) is None
