import pytest

from assertions import assert_equals, assert_throws, assert_true
from errors import AssertionFailed, ElementNotFound, NavigationError


def test_assert_equals_passes():
    assert_equals("Selenium", "Selenium", "title")
    assert_equals(1, 1)


def test_assert_equals_reports_pair():
    with pytest.raises(AssertionFailed) as excinfo:
        assert_equals("https://www.selenium.dev/", "https://www.selenium.dev/blog/", "homepage url")
    err = excinfo.value
    assert err.label == "homepage url"
    assert err.expected == "https://www.selenium.dev/"
    assert err.actual == "https://www.selenium.dev/blog/"
    assert "expected 'https://www.selenium.dev/'" in str(err)


def test_assertion_failed_is_an_assertion_error():
    with pytest.raises(AssertionError):
        assert_equals(1, 2)


def test_assert_true():
    assert_true(True)
    with pytest.raises(AssertionFailed, match="popup is visible"):
        assert_true(False, "popup is visible")


@pytest.mark.asyncio
async def test_assert_throws_returns_error():
    async def missing():
        raise ElementNotFound("nope")

    err = await assert_throws(ElementNotFound, missing)
    assert str(err) == "nope"


@pytest.mark.asyncio
async def test_assert_throws_accepts_plain_callables():
    def boom():
        raise ElementNotFound("sync")

    await assert_throws(ElementNotFound, boom)


@pytest.mark.asyncio
async def test_assert_throws_fails_when_nothing_raised():
    async def fine():
        return "element"

    with pytest.raises(AssertionFailed, match="ElementNotFound was not raised"):
        await assert_throws(ElementNotFound, fine, "modal absent")


@pytest.mark.asyncio
async def test_assert_throws_lets_other_errors_through():
    async def broken():
        raise NavigationError("offline")

    with pytest.raises(NavigationError):
        await assert_throws(ElementNotFound, broken)
