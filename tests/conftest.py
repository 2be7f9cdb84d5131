from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from session import DriverConfig, SessionHandle


@pytest.fixture
def config():
    return DriverConfig(pause_seconds=0, poll_timeout=0.2, poll_interval=0.01, find_timeout=1.0, navigation_timeout=2.0)


def make_mock_page(url="about:blank"):
    page = MagicMock()
    page.url = url
    page.is_closed.return_value = False
    page.goto = AsyncMock()
    page.title = AsyncMock(return_value="")
    page.query_selector = AsyncMock(return_value=None)
    page.bring_to_front = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.set_viewport_size = AsyncMock()
    return page


@pytest.fixture
def mock_session(config):
    page = make_mock_page()
    context = MagicMock()
    context.pages = [page]
    session = SessionHandle(
        playwright=SimpleNamespace(stop=AsyncMock()),
        browser=SimpleNamespace(close=AsyncMock()),
        context=context,
        page=page,
        config=config,
    )
    session.register(page)
    return session
