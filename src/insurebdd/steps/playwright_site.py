"""Steps for the playwright.dev smoke feature."""

from __future__ import annotations

from playwright.sync_api import expect
from pytest_bdd import given, then

from insurebdd.core.world import World
from insurebdd.pages.playwright_home import PlaywrightHomePage


@given("I am on the Playwright homepage")
def given_on_playwright_home(world: World) -> None:
    page = world.initialize_page()
    PlaywrightHomePage(page).navigate_to_home_page()


@then("I should see the Playwright hero text")
def then_hero_text_visible(world: World) -> None:
    expect(world.require_page().locator("text=Playwright").first).to_be_visible()


@then("the Playwright docs link should be visible")
def then_docs_link_visible(world: World) -> None:
    expect(PlaywrightHomePage(world.require_page()).docs_link).to_be_visible()
