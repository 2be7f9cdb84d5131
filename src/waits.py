"""Waiting on UI work the driver cannot observe directly.

`pause` is the fixed one-second sleep used after typing into the search box,
before the search backend has answered. It is a known source of flakiness: the
time needed depends on the client's connection and the search service's
response time. `wait_until` and `wait_for_element` poll instead, bounded by a
timeout, and are selected with the `poll` wait strategy.
"""

import asyncio
import inspect

from assertions import assert_throws
from errors import DriverTimeout, ElementNotFound


PAUSE_SECONDS = 1.0
POLL_TIMEOUT = 10.0
POLL_INTERVAL = 0.1


async def pause(duration: float = PAUSE_SECONDS) -> None:
    await asyncio.sleep(duration)


async def wait_until(condition, timeout: float = POLL_TIMEOUT, interval: float = POLL_INTERVAL, description: str = "condition"):
    """Poll condition until it returns a truthy value, and return that value."""
    loop = asyncio.get_running_loop()
    end = loop.time() + timeout
    while True:
        value = condition()
        if inspect.isawaitable(value):
            value = await value
        if value:
            return value
        if loop.time() >= end:
            raise DriverTimeout(f"Timed out after {timeout:g}s waiting for {description}")
        await asyncio.sleep(interval)


async def wait_for_element(page, locator, timeout: float = POLL_TIMEOUT, interval: float = POLL_INTERVAL):
    """Retry page.find until the locator matches."""

    async def probe():
        try:
            return await page.find(locator)
        except ElementNotFound:
            return None

    return await wait_until(probe, timeout=timeout, interval=interval, description=f"element {locator}")


async def assert_absent(page, locator) -> None:
    # only a not-found lookup counts as absence; driver errors still surface
    await assert_throws(ElementNotFound, lambda: page.find(locator), label=f"{locator} should be absent")


async def settle(page, locator) -> None:
    """Let asynchronous UI work finish using the configured wait strategy."""
    config = page.config
    if config.wait_strategy == "poll":
        await wait_for_element(page, locator, timeout=config.poll_timeout, interval=config.poll_interval)
    else:
        await pause(config.pause_seconds)
