import asyncio
import json
from dataclasses import dataclass
from enum import Enum

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from errors import (
    DriverTimeout,
    ElementNotFound,
    ElementNotInteractable,
    HarnessError,
    NavigationError,
    NoSuchWindow,
)
from session import SessionHandle


MAXIMIZED_VIEWPORT = {"width": 1920, "height": 1080}


class By(str, Enum):
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    CLASS_NAME = "class name"
    ID = "id"


class NamedKey(str, Enum):
    ENTER = "Enter"
    TAB = "Tab"
    ESCAPE = "Escape"
    BACKSPACE = "Backspace"
    ARROW_DOWN = "ArrowDown"
    ARROW_UP = "ArrowUp"


@dataclass(frozen=True)
class Locator:
    by: By
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError(f"Empty {self.by.value} locator")
        if self.by is By.CLASS_NAME and any(c.isspace() for c in self.value):
            raise ValueError(f"Compound class names are not permitted: {self.value!r}")

    @property
    def selector(self) -> str:
        """Playwright selector matching the same elements as the locator."""
        if self.by is By.LINK_TEXT:
            return f"a:text-is({json.dumps(self.value)})"
        if self.by is By.PARTIAL_LINK_TEXT:
            return f"a:has-text({json.dumps(self.value)})"
        if self.by is By.CLASS_NAME:
            return f".{self.value}"
        return f"[id={json.dumps(self.value)}]"

    def __str__(self) -> str:
        return f"{self.by.value}={self.value!r}"


def link_text(text: str) -> Locator:
    return Locator(By.LINK_TEXT, text)


def partial_link_text(text: str) -> Locator:
    return Locator(By.PARTIAL_LINK_TEXT, text)


def css_class(name: str) -> Locator:
    return Locator(By.CLASS_NAME, name)


def element_id(value: str) -> Locator:
    return Locator(By.ID, value)


@dataclass
class ElementRef:
    handle: object
    locator: Locator

    async def is_visible(self) -> bool:
        try:
            return await self.handle.is_visible()
        except PlaywrightError as e:
            raise HarnessError(f"Visibility check of {self.locator} failed: {e}") from e


class BrowserPage:
    """Typed operations over the session's current window."""

    def __init__(self, session: SessionHandle, verbose: bool = False):
        self.session = session
        self.config = session.config
        self.verbose = verbose

    @property
    def page(self):
        return self.session.page

    def _trace(self, msg: str) -> None:
        if self.verbose:
            print(f"→ {msg}")

    async def navigate(self, url: str) -> None:
        self._trace(f"Navigating to {url}")
        try:
            await self.page.goto(url, wait_until="load", timeout=self.config.navigation_timeout * 1000)
        except PlaywrightTimeoutError as e:
            raise DriverTimeout(f"Navigation to {url} timed out after {self.config.navigation_timeout:g}s") from e
        except PlaywrightError as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e

    def current_url(self) -> str:
        return self.page.url

    async def title(self) -> str:
        return await self.page.title()

    async def find(self, locator: Locator) -> ElementRef:
        # single lookup, callers wanting retries go through waits.wait_for_element
        try:
            handle = await asyncio.wait_for(self.page.query_selector(locator.selector), timeout=self.config.find_timeout)
        except asyncio.TimeoutError as e:
            raise DriverTimeout(f"Lookup of {locator} timed out after {self.config.find_timeout:g}s") from e
        except PlaywrightError as e:
            raise HarnessError(f"Lookup of {locator} failed: {e}") from e
        if handle is None:
            raise ElementNotFound(f"No element matches {locator}")
        self._trace(f"Found {locator}")
        return ElementRef(handle=handle, locator=locator)

    async def click(self, element: ElementRef) -> None:
        self._trace(f"Clicking {element.locator}")
        try:
            await element.handle.click(timeout=self.config.find_timeout * 1000)
        except PlaywrightError as e:
            raise ElementNotInteractable(f"Could not click {element.locator}: {e}") from e

    async def type_text(self, element: ElementRef, text: str) -> None:
        self._trace(f"Typing {text!r} into {element.locator}")
        try:
            await element.handle.type(text, timeout=self.config.find_timeout * 1000)
        except PlaywrightError as e:
            raise ElementNotInteractable(f"Could not type into {element.locator}: {e}") from e

    async def send_key(self, element: ElementRef, key: NamedKey) -> None:
        self._trace(f"Pressing {key.value} on {element.locator}")
        try:
            await element.handle.press(key.value, timeout=self.config.find_timeout * 1000)
        except PlaywrightError as e:
            raise ElementNotInteractable(f"Could not send {key.value} to {element.locator}: {e}") from e

    def window_handles(self) -> list[str]:
        """Open windows in creation order."""
        pages = [p for p in self.session.context.pages if not p.is_closed()]
        return [self.session.register(p) for p in pages]

    async def switch_to(self, handle: str) -> None:
        for known, page in self.session.windows:
            if known != handle or page.is_closed():
                continue
            self._trace(f"Switching to {handle}")
            self.session.page = page
            await page.bring_to_front()
            try:
                await page.wait_for_load_state("load", timeout=self.config.navigation_timeout * 1000)
            except PlaywrightTimeoutError as e:
                raise DriverTimeout(f"{handle} did not finish loading") from e
            return
        raise NoSuchWindow(f"No open window with handle {handle}")

    async def maximize(self) -> None:
        self._trace("Maximizing window")
        await self.page.set_viewport_size(MAXIMIZED_VIEWPORT)
