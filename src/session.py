import itertools
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from errors import DriverEnvironmentError
from waits import PAUSE_SECONDS, POLL_INTERVAL, POLL_TIMEOUT


# Chrome's first-run search-engine-choice dialog blocks automation until dismissed
DISABLE_SEARCH_ENGINE_CHOICE = "--disable-search-engine-choice-screen"

WAIT_STRATEGIES = ("pause", "poll")


def _env_ms(name: str, default_seconds: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default_seconds
    try:
        value = int(raw)
    except Exception:
        return default_seconds
    # zero would disable Playwright timeouts and expire asyncio ones at once
    if value <= 0:
        return default_seconds
    return value / 1000.0


@dataclass
class DriverConfig:
    """Everything needed to launch a session; one object per run."""

    headless: bool = True
    channel: str | None = None
    executable_path: str | None = None
    browser_args: tuple[str, ...] = (DISABLE_SEARCH_ENGINE_CHOICE,)
    viewport: dict = field(default_factory=lambda: {"width": 1366, "height": 900})
    navigation_timeout: float = 30.0
    find_timeout: float = 10.0
    wait_strategy: str = "pause"
    pause_seconds: float = PAUSE_SECONDS
    poll_timeout: float = POLL_TIMEOUT
    poll_interval: float = POLL_INTERVAL

    @classmethod
    def from_env(cls, **overrides) -> "DriverConfig":
        strategy = (os.environ.get("SEARCH_WAIT_STRATEGY") or "pause").strip().lower()
        if strategy not in WAIT_STRATEGIES:
            strategy = "pause"
        values = {
            "channel": os.environ.get("BROWSER_CHANNEL") or None,
            "executable_path": os.environ.get("BROWSER_EXECUTABLE") or None,
            "navigation_timeout": _env_ms("NAV_TIMEOUT_MS", 30.0),
            "find_timeout": _env_ms("FIND_TIMEOUT_MS", 10.0),
            "wait_strategy": strategy,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class SessionHandle:
    playwright: object
    browser: object
    context: object
    page: object
    config: DriverConfig
    windows: list = field(default_factory=list)
    closed: bool = False
    _counter: object = field(default_factory=lambda: itertools.count(1), repr=False)

    def register(self, page) -> str:
        """Return the handle for a page, assigning the next one on first sight."""
        for handle, known in self.windows:
            if known is page:
                return handle
        handle = f"window-{next(self._counter)}"
        self.windows.append((handle, page))
        return handle


async def open_session(config: DriverConfig, verbose: bool = False) -> SessionHandle:
    """Launch a fresh browser, context and first window."""
    launch_kwargs = {"headless": config.headless, "args": list(config.browser_args)}
    if config.channel:
        launch_kwargs["channel"] = config.channel
    if config.executable_path:
        launch_kwargs["executable_path"] = config.executable_path

    p = None
    try:
        p = await async_playwright().start()
        browser = await p.chromium.launch(**launch_kwargs)
    except (PlaywrightError, OSError) as e:
        if p is not None:
            await p.stop()
        raise DriverEnvironmentError(f"Unable to launch browser: {e}") from e

    try:
        context = await browser.new_context(viewport=config.viewport)
        context.set_default_timeout(config.find_timeout * 1000)
        context.set_default_navigation_timeout(config.navigation_timeout * 1000)
        page = await context.new_page()
    except PlaywrightError as e:
        await browser.close()
        await p.stop()
        raise DriverEnvironmentError(f"Unable to open browser window: {e}") from e

    session = SessionHandle(playwright=p, browser=browser, context=context, page=page, config=config)
    session.register(page)
    context.on("page", session.register)
    if verbose:
        print(f"→ Browser session opened (channel={config.channel or 'chromium'}, headless={config.headless})")
    return session


async def close_session(session: SessionHandle | None, verbose: bool = False) -> None:
    """Quit the browser and every window it owns. Never raises."""
    if session is None or session.closed:
        return
    session.closed = True
    try:
        await session.browser.close()
    except Exception as e:
        print(f"⚠️ Browser close failed: {e}")
    try:
        await session.playwright.stop()
    except Exception as e:
        print(f"⚠️ Driver stop failed: {e}")
    if verbose:
        print("→ Browser session closed")


@asynccontextmanager
async def browser_session(config: DriverConfig, verbose: bool = False):
    session = await open_session(config, verbose=verbose)
    try:
        yield session
    finally:
        await close_session(session, verbose=verbose)
