"""
BrowserSession - attach to an already-running Chrome over CDP.

Scripts never launch or kill the browser. They connect, pick the most
recently used tab, do one thing, and disconnect.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    Page,
    Playwright,
    Error as PlaywrightError,
)

from browser_skill.config import SkillConfig
from browser_skill.errors import BrowserConnectionError

logger = logging.getLogger("browser_skill.session")

CONNECT_HINT = "Could not connect to browser. Start Chrome with --remote-debugging-port=9222"


class BrowserSession:
    """A CDP attachment to an existing browser."""

    def __init__(self, config: SkillConfig | None = None) -> None:
        self.config = config or SkillConfig()
        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def connect(self) -> None:
        if self._browser:
            return

        self._pw = await async_playwright().start()
        logger.info(f"Connecting to Chrome at {self.config.cdp_url}")
        try:
            self._browser = await self._pw.chromium.connect_over_cdp(
                self.config.cdp_url,
                timeout=self.config.connection_timeout_ms,
            )
        except Exception as exc:
            logger.debug(f"connect_over_cdp failed: {exc}")
            await self._pw.stop()
            self._pw = None
            raise BrowserConnectionError(CONNECT_HINT) from exc

    async def close(self) -> None:
        # Over CDP, Browser.close() only disconnects; the user's Chrome keeps running.
        try:
            if self._browser:
                await self._browser.close()
        except PlaywrightError as exc:
            logger.debug(f"Disconnect failed: {exc}")
        self._browser = None
        if self._pw:
            await self._pw.stop()
            self._pw = None
        logger.info("Disconnected from Chrome")

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise BrowserConnectionError(CONNECT_HINT)
        return self._browser

    def pages(self) -> list[Page]:
        return [page for context in self.browser.contexts for page in context.pages]

    def active_page(self) -> Page:
        """The last page, i.e. the most recently used tab."""
        pages = self.pages()
        if not pages:
            raise BrowserConnectionError("No active tab found")
        return pages[-1]

    async def new_page(self) -> Page:
        contexts = self.browser.contexts
        context = contexts[0] if contexts else await self.browser.new_context()
        return await context.new_page()

    async def full_html(self, page: Page) -> str:
        """
        Serialized DOM via raw CDP commands.

        Works on pages whose Trusted Types policy blocks script-side
        serialization.
        """
        client = await page.context.new_cdp_session(page)
        try:
            document = await client.send("DOM.getDocument", {"depth": -1, "pierce": True})
            result = await client.send("DOM.getOuterHTML", {"nodeId": document["root"]["nodeId"]})
            return result["outerHTML"]
        finally:
            await client.detach()


@asynccontextmanager
async def open_session(config: SkillConfig | None = None) -> AsyncGenerator[BrowserSession, None]:
    session = BrowserSession(config)
    await session.connect()
    try:
        yield session
    finally:
        await session.close()
