"""In-memory stand-ins for the browser facade, modelled on the selenium.dev pages the scenarios visit."""

from errors import ElementNotFound, NoSuchWindow
from page_facade import NamedKey, partial_link_text, link_text
from scenarios import (
    DOCUMENTATION_URL,
    HOMEPAGE_URL,
    LOCATORS_PAGE_URL,
    SEARCH_BUTTON,
    SEARCH_HIT_SELECT,
    SEARCH_INPUT,
    SEARCH_MODAL,
    SEARCH_PLACEHOLDER,
    SEARCH_RESULTS,
)


EDIT_PAGE_URL = "https://github.com/SeleniumHQ/seleniumhq.github.io/edit/trunk/website_and_docs/content/documentation/_index.en.md"


class FakeElement:
    def __init__(self, locator, visible=True, on_click=None, on_type=None, on_key=None):
        self.locator = locator
        self.visible = visible
        self.on_click = on_click
        self.on_type = on_type
        self.on_key = on_key

    async def is_visible(self) -> bool:
        return self.visible


class FakePage:
    def __init__(self, config):
        self.config = config
        self.routes = {}
        self.titles = {}
        self.present = {}
        self.windows = {"window-1": "about:blank"}
        self.active = "window-1"
        self.typed = []
        self.keys = []
        self.maximized = False

    def go(self, url):
        self.windows[self.active] = url
        self.present = {}
        setup = self.routes.get(url)
        if setup:
            setup(self)

    def add(self, locator, **kwargs):
        self.present[locator] = FakeElement(locator, **kwargs)

    def open_tab(self, url):
        handle = f"window-{len(self.windows) + 1}"
        self.windows[handle] = url

    async def navigate(self, url):
        self.go(url)

    def current_url(self):
        return self.windows[self.active]

    async def title(self):
        return self.titles.get(self.current_url(), "")

    async def find(self, locator):
        if locator in self.present:
            return self.present[locator]
        raise ElementNotFound(f"No element matches {locator}")

    async def click(self, element):
        if element.on_click:
            element.on_click(self)

    async def type_text(self, element, text):
        self.typed.append(text)
        if element.on_type:
            element.on_type(self, text)

    async def send_key(self, element, key):
        self.keys.append(key)
        if element.on_key:
            element.on_key(self, key)

    def window_handles(self):
        return list(self.windows)

    async def switch_to(self, handle):
        if handle not in self.windows:
            raise NoSuchWindow(handle)
        self.active = handle

    async def maximize(self):
        self.maximized = True


def selenium_dev_site(config, result_url=LOCATORS_PAGE_URL, opens_tab=True, returns_results=True):
    """A FakePage wired like the live homepage and documentation pages."""
    page = FakePage(config)

    def homepage(p):
        p.add(link_text("Documentation"), on_click=lambda p: p.go(DOCUMENTATION_URL))

    def show_results(p, text):
        p.add(SEARCH_RESULTS)
        p.add(SEARCH_HIT_SELECT, on_click=lambda p: p.go(result_url))

    def on_enter(p, key):
        if key is NamedKey.ENTER and SEARCH_HIT_SELECT in p.present:
            p.go(result_url)

    def open_search(p):
        p.add(SEARCH_MODAL)
        p.add(SEARCH_INPUT, on_type=show_results if returns_results else None, on_key=on_enter)

    def documentation(p):
        p.add(SEARCH_PLACEHOLDER, on_click=open_search)
        p.add(SEARCH_BUTTON, on_click=open_search)
        p.add(
            partial_link_text("Edit this page"),
            on_click=(lambda p: p.open_tab(EDIT_PAGE_URL)) if opens_tab else None,
        )

    page.routes[HOMEPAGE_URL] = homepage
    page.routes[DOCUMENTATION_URL] = documentation
    page.titles[HOMEPAGE_URL] = "Selenium"
    return page
