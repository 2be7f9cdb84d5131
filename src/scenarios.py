from dataclasses import dataclass
from typing import Awaitable, Callable

from assertions import assert_equals, assert_throws, assert_true
from errors import DriverTimeout, ElementNotFound
from page_facade import BrowserPage, NamedKey, css_class, element_id, link_text, partial_link_text
from waits import assert_absent, settle, wait_until


HOMEPAGE_URL = "https://www.selenium.dev/"
DOCUMENTATION_URL = "https://www.selenium.dev/documentation/"
LOCATORS_PAGE_URL = "https://www.selenium.dev/documentation/webdriver/elements/locators/"
GITHUB_PREFIX = "https://github.com/"

SEARCH_QUERY = "Locators"
SEARCH_PLACEHOLDER = css_class("DocSearch-Button-Placeholder")
SEARCH_BUTTON = css_class("DocSearch-Button-Container")
SEARCH_MODAL = css_class("DocSearch-Modal")
SEARCH_INPUT = element_id("docsearch-input")
SEARCH_RESULTS = css_class("DocSearch-Dropdown-Container")
SEARCH_HIT_SELECT = css_class("DocSearch-Hit-Select-Icon")


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    body: Callable[[BrowserPage], Awaitable[None]]


SCENARIOS: list[Scenario] = []


def scenario(name: str, description: str = ""):
    def register(fn):
        SCENARIOS.append(Scenario(name=name, description=description or name, body=fn))
        return fn
    return register


def select_scenarios(pattern: str | None = None) -> list[Scenario]:
    if not pattern:
        return list(SCENARIOS)
    needle = pattern.lower()
    return [s for s in SCENARIOS if needle in s.name.lower() or needle in s.description.lower()]


async def windows_after_opening(page: BrowserPage, expected: int) -> list[str]:
    """Window handles once `expected` are open, or those open when the poll gives up.

    New tabs register with the browser shortly after the click that opens them.
    """
    def opened():
        handles = page.window_handles()
        return handles if len(handles) >= expected else None

    try:
        return await wait_until(opened, timeout=page.config.poll_timeout, interval=page.config.poll_interval,
                                description=f"{expected} windows")
    except DriverTimeout:
        return page.window_handles()


async def type_search_query(page: BrowserPage, ready) -> None:
    """Open the documentation search, type the query and let results arrive."""
    await page.click(await page.find(SEARCH_BUTTON))
    await page.type_text(await page.find(SEARCH_INPUT), SEARCH_QUERY)
    await settle(page, ready)


@scenario("homepage_url", "Homepage URL identity")
async def homepage_url(page: BrowserPage) -> None:
    await page.navigate(HOMEPAGE_URL)
    assert_equals(HOMEPAGE_URL, page.current_url(), "homepage url")


@scenario("homepage_title", "Homepage title is \"Selenium\"")
async def homepage_title(page: BrowserPage) -> None:
    await page.navigate(HOMEPAGE_URL)
    assert_equals("Selenium", await page.title(), "homepage title")


@scenario("documentation_link", "Clicking on \"Documentation\" from the homepage navigates to the expected url")
async def documentation_link(page: BrowserPage) -> None:
    await page.navigate(HOMEPAGE_URL)
    await page.click(await page.find(link_text("Documentation")))
    assert_equals(DOCUMENTATION_URL, page.current_url(), "url after clicking Documentation")


@scenario("search_popup", "Clicking on \"Search\" from the \"Documentation\" page opens a search popup")
async def search_popup(page: BrowserPage) -> None:
    await page.navigate(DOCUMENTATION_URL)
    await assert_throws(ElementNotFound, lambda: page.find(SEARCH_MODAL), f"{SEARCH_MODAL} before opening search")

    await page.click(await page.find(SEARCH_PLACEHOLDER))
    modal = await page.find(SEARCH_MODAL)
    assert_true(await modal.is_visible(), "search popup is visible")


@scenario("search_results", "Typing in searchbar shows results")
async def search_results(page: BrowserPage) -> None:
    await page.navigate(DOCUMENTATION_URL)
    await page.click(await page.find(SEARCH_BUTTON))
    await assert_absent(page, SEARCH_RESULTS)

    await page.type_text(await page.find(SEARCH_INPUT), SEARCH_QUERY)
    await settle(page, SEARCH_RESULTS)
    dropdown = await page.find(SEARCH_RESULTS)
    assert_true(await dropdown.is_visible(), "search results dropdown is visible")


@scenario("search_result_click", "Clicking on search result navigates to corresponding page")
async def search_result_click(page: BrowserPage) -> None:
    await page.navigate(DOCUMENTATION_URL)
    await type_search_query(page, ready=SEARCH_HIT_SELECT)
    await page.click(await page.find(SEARCH_HIT_SELECT))
    assert_equals(LOCATORS_PAGE_URL, page.current_url(), "url after clicking first search result")


@scenario("search_enter", "Pressing enter after typing in searchbar navigates to corresponding page (first hit)")
async def search_enter(page: BrowserPage) -> None:
    await page.navigate(DOCUMENTATION_URL)
    await type_search_query(page, ready=SEARCH_HIT_SELECT)
    await page.send_key(await page.find(SEARCH_INPUT), NamedKey.ENTER)
    assert_equals(LOCATORS_PAGE_URL, page.current_url(), "url after pressing Enter in search")


@scenario("edit_page_tab", "User clicks on \"Edit this page\" opens new tab to github")
async def edit_page_tab(page: BrowserPage) -> None:
    await page.maximize()
    await page.navigate(DOCUMENTATION_URL)
    assert_equals(1, len(page.window_handles()), "window count before clicking Edit this page")

    await page.click(await page.find(partial_link_text("Edit this page")))
    handles = await windows_after_opening(page, 2)
    assert_equals(2, len(handles), "window count after clicking Edit this page")

    await page.switch_to(handles[1])
    url = page.current_url()
    assert_true(url.startswith(GITHUB_PREFIX), f"new tab url {url!r} starts with {GITHUB_PREFIX}")
