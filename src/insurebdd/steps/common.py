"""Generic navigation, interaction, verification and data steps."""

from __future__ import annotations

import re

from playwright.sync_api import expect
from pytest_bdd import given, when, then, parsers

from insurebdd.core import clock
from insurebdd.core.world import (
    World,
    page_url,
    validate_email,
    validate_phone,
    validate_ssn,
    validate_zip_code,
)


def _button(name: str) -> str:
    return f'[data-testid="{name.lower()}-button"], button:has-text("{name}")'


def _input(name: str) -> str:
    return f'[data-testid="{name.lower()}-input"], input[name="{name}"]'


def _text(text: str) -> str:
    return f'text="{text}"'


# ---- navigation ----
@given(parsers.parse('I am on the "{page_name}" page'))
def given_on_page(world: World, page_name: str) -> None:
    world.initialize_page()
    world.navigate_to_page(page_url(page_name))


@when(parsers.parse('I navigate to the "{page_name}" page'))
def when_navigate_to_named_page(world: World, page_name: str) -> None:
    world.navigate_to_page(page_url(page_name))


@when(parsers.parse('I navigate to "{url}"'))
def when_navigate_to_url(world: World, url: str) -> None:
    world.navigate_to_page(url)


@when("I refresh the page")
def when_refresh(world: World) -> None:
    world.reload_page()


@when("I go back")
def when_go_back(world: World) -> None:
    world.go_back()


@when("I go forward")
def when_go_forward(world: World) -> None:
    world.go_forward()


# ---- interaction ----
@when(parsers.parse('I click on "{selector}"'))
def when_click_on(world: World, selector: str) -> None:
    world.click_element(selector)


@when(parsers.parse('I click the "{button_name}" button'))
def when_click_button(world: World, button_name: str) -> None:
    world.click_element(_button(button_name))


@when(parsers.parse('I enter "{text}" in the "{field_name}" field'))
def when_enter_in_field(world: World, text: str, field_name: str) -> None:
    selector = f'{_input(field_name)}, input[placeholder*="{field_name}"]'
    world.fill_input(selector, text)


@when(parsers.parse('I enter "{text}" in "{selector}"'))
def when_enter_in_selector(world: World, text: str, selector: str) -> None:
    world.fill_input(selector, text)


@when(parsers.parse('I clear the "{field_name}" field'))
def when_clear_field(world: World, field_name: str) -> None:
    world.fill_input(_input(field_name), "")


@when(parsers.parse('I select "{option}" from "{field_name}" dropdown'))
def when_select_option(world: World, option: str, field_name: str) -> None:
    world.select_option(f'[data-testid="{field_name.lower()}-select"], select[name="{field_name}"]', option)


def _checkbox(name: str) -> str:
    return f'[data-testid="{name.lower()}-checkbox"], input[type="checkbox"][name="{name}"]'


@when(parsers.parse('I check the "{checkbox_name}" checkbox'))
def when_check(world: World, checkbox_name: str) -> None:
    world.check_checkbox(_checkbox(checkbox_name))


@when(parsers.parse('I uncheck the "{checkbox_name}" checkbox'))
def when_uncheck(world: World, checkbox_name: str) -> None:
    world.uncheck_checkbox(_checkbox(checkbox_name))


# ---- verification ----
@then(parsers.parse('I should see "{text}"'))
def then_see_text(world: World, text: str) -> None:
    expect(world.require_page().locator(_text(text))).to_be_visible()


@then(parsers.parse('I should see the text "{text}"'))
def then_see_the_text(world: World, text: str) -> None:
    expect(world.require_page().locator(_text(text))).to_be_visible()


@then(parsers.parse('I should not see "{text}"'))
def then_not_see_text(world: World, text: str) -> None:
    expect(world.require_page().locator(_text(text))).not_to_be_visible()


@then(parsers.parse('I should see "{selector}" element'))
def then_see_element(world: World, selector: str) -> None:
    expect(world.require_page().locator(selector)).to_be_visible()


@then(parsers.parse('I should not see "{selector}" element'))
def then_not_see_element(world: World, selector: str) -> None:
    expect(world.require_page().locator(selector)).not_to_be_visible()


@then(parsers.parse('the "{field_name}" field should contain "{expected}"'))
def then_field_contains(world: World, field_name: str, expected: str) -> None:
    expect(world.require_page().locator(_input(field_name))).to_have_value(expected)


@then(parsers.parse('the "{field_name}" field should be empty'))
def then_field_empty(world: World, field_name: str) -> None:
    expect(world.require_page().locator(_input(field_name))).to_have_value("")


@then(parsers.parse('the "{button_name}" button should be "{state}"'))
def then_button_state(world: World, button_name: str, state: str) -> None:
    locator = world.require_page().locator(_button(button_name))
    state = state.lower()
    if state == "enabled":
        expect(locator).to_be_enabled()
    elif state == "disabled":
        expect(locator).to_be_disabled()
    elif state == "visible":
        expect(locator).to_be_visible()
    elif state == "hidden":
        expect(locator).not_to_be_visible()
    else:
        raise ValueError(f"Unknown button state: {state}. Valid states: enabled, disabled, visible, hidden")


@then(parsers.parse('the page title should be "{title}"'))
def then_title_is(world: World, title: str) -> None:
    expect(world.require_page()).to_have_title(title)


@then(parsers.parse('the page title should contain "{partial}"'))
def then_title_contains(world: World, partial: str) -> None:
    expect(world.require_page()).to_have_title(re.compile(re.escape(partial), re.IGNORECASE))


@then(parsers.parse('the URL should be "{url}"'))
def then_url_is(world: World, url: str) -> None:
    expect(world.require_page()).to_have_url(url)


@then(parsers.parse('the URL should contain "{part}"'))
def then_url_contains(world: World, part: str) -> None:
    expect(world.require_page()).to_have_url(re.compile(re.escape(part)))


# ---- waits ----
@when(parsers.parse("I wait for {seconds:d} seconds"))
def when_wait_seconds(world: World, seconds: int) -> None:
    world.wait_for_timeout(seconds * 1000)


@when(parsers.parse("I wait for {milliseconds:d} milliseconds"))
def when_wait_milliseconds(world: World, milliseconds: int) -> None:
    world.wait_for_timeout(milliseconds)


@when(parsers.parse('I wait for "{selector}" to be visible'))
def when_wait_visible(world: World, selector: str) -> None:
    world.wait_for_element(selector)


@when(parsers.parse('I wait for "{selector}" to disappear'))
def when_wait_gone(world: World, selector: str) -> None:
    world.require_page().wait_for_selector(selector, state="detached")


# ---- screenshots & scrolling ----
@when("I take a screenshot")
def when_screenshot(world: World) -> None:
    world.take_screenshot(f"manual-{clock.file_timestamp()}")


@when(parsers.parse('I take a screenshot named "{name}"'))
def when_named_screenshot(world: World, name: str) -> None:
    world.take_screenshot(name)


@when(parsers.parse('I scroll to "{selector}"'))
def when_scroll_to(world: World, selector: str) -> None:
    world.require_page().locator(selector).scroll_into_view_if_needed()


@when("I scroll to the top of the page")
def when_scroll_top(world: World) -> None:
    world.require_page().evaluate("() => window.scrollTo(0, 0)")


@when("I scroll to the bottom of the page")
def when_scroll_bottom(world: World) -> None:
    world.require_page().evaluate("() => window.scrollTo(0, document.body.scrollHeight)")


# ---- field format validation ----
def _field_value(world: World, field_name: str) -> str:
    return world.require_page().locator(_input(field_name)).input_value()


@then(parsers.parse('the "{field_name}" field should have a valid email'))
def then_field_valid_email(world: World, field_name: str) -> None:
    value = _field_value(world, field_name)
    assert validate_email(value), f"Not a valid email: {value!r}"


@then(parsers.parse('the "{field_name}" field should have a valid phone number'))
def then_field_valid_phone(world: World, field_name: str) -> None:
    value = _field_value(world, field_name)
    assert validate_phone(value), f"Not a valid phone number: {value!r}"


@then(parsers.parse('the "{field_name}" field should have a valid SSN'))
def then_field_valid_ssn(world: World, field_name: str) -> None:
    value = _field_value(world, field_name)
    assert validate_ssn(value), f"Not a valid SSN: {value!r}"


@then(parsers.parse('the "{field_name}" field should have a valid zip code'))
def then_field_valid_zip(world: World, field_name: str) -> None:
    value = _field_value(world, field_name)
    assert validate_zip_code(value), f"Not a valid zip code: {value!r}"


# ---- debug ----
@when(parsers.parse("I debug pause for {seconds:d} seconds"))
def when_debug_pause(world: World, seconds: int) -> None:
    if world.is_debug_mode():
        world.log_message(f"Debug pause for {seconds} seconds", "debug")
        world.wait_for_timeout(seconds * 1000)


@when(parsers.parse('I log "{message}"'))
def when_log(world: World, message: str) -> None:
    world.log_message(message, "info")
