"""Shared fakes for tests that must not touch a real browser."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError, async_playwright


class FakeClock:
    """Monotonic clock whose sleep only advances time."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeSession:
    def __init__(self, page) -> None:
        self.page = page
        self.new_page = AsyncMock(return_value=page)
        self.full_html = AsyncMock(return_value="<html><body></body></html>")

    def active_page(self):
        return self.page


def fake_open_session(session: FakeSession):
    @asynccontextmanager
    async def _open(config=None):
        yield session

    return _open


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def page() -> MagicMock:
    mock = MagicMock()
    mock.url = "https://example.com/"
    mock.goto = AsyncMock()
    mock.evaluate = AsyncMock()
    mock.query_selector = AsyncMock()
    mock.wait_for_selector = AsyncMock()
    mock.screenshot = AsyncMock()
    return mock


@pytest.fixture
def session(page) -> FakeSession:
    return FakeSession(page)


@pytest_asyncio.fixture
async def chromium_page():
    """Blank page in a real headless Chromium; skips when none can be launched."""
    async with async_playwright() as pw:
        try:
            browser = await pw.chromium.launch()
        except PlaywrightError as exc:
            pytest.skip(f"Chromium is not available: {exc}")
        try:
            yield await browser.new_page()
        finally:
            await browser.close()
