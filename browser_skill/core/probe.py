from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import ElementHandle, Page

from browser_skill.errors import (
    ElementNotEnabled,
    ElementNotFound,
    ElementNotReady,
    ElementNotVisible,
    InvalidArgument,
)

logger = logging.getLogger("browser_skill.probe")

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_POLL_INTERVAL_MS = 100

# offsetParent is null under a display:none ancestor and for detached nodes.
IS_VISIBLE_JS = """
(el) => {
    const style = window.getComputedStyle(el);
    return (
        style.display !== 'none' &&
        style.visibility !== 'hidden' &&
        style.opacity !== '0' &&
        el.offsetParent !== null
    );
}
"""

IS_ENABLED_JS = "(el) => !el.disabled"


@dataclass(frozen=True)
class WaitSpec:
    selector: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    require_visible: bool = True
    require_enabled: bool = True

    def __post_init__(self) -> None:
        if not self.selector:
            raise InvalidArgument("selector is required")
        if self.timeout_ms <= 0:
            raise InvalidArgument(f"timeout_ms must be positive, got {self.timeout_ms}")


class ElementProber:
    """Polls a page until an element exists, is visible and is enabled.

    All phases share one deadline started when ``wait_for_element`` is called,
    so the total wait never exceeds ``spec.timeout_ms``.
    """

    def __init__(
        self,
        page: Page,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._page = page
        self._interval = poll_interval_ms / 1000.0
        self._clock = clock
        self._sleep = sleep

    @property
    def page(self) -> Page:
        return self._page

    async def _poll(self, check: Callable[[], Awaitable[Any]], deadline: float) -> Any:
        while self._clock() < deadline:
            result = await check()
            if result:
                return result
            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            await self._sleep(min(self._interval, remaining))
        return None

    def _fail(self, error: type[ElementNotReady], spec: WaitSpec, started: float) -> ElementNotReady:
        waited_ms = int(round((self._clock() - started) * 1000))
        logger.info(f"[Probe] {error.__name__} for {spec.selector!r} after {waited_ms}ms")
        return error(spec.selector, waited_ms)

    async def wait_for_element(self, spec: WaitSpec) -> ElementHandle:
        started = self._clock()
        deadline = started + spec.timeout_ms / 1000.0

        element: Optional[ElementHandle] = await self._poll(
            lambda: self._page.query_selector(spec.selector), deadline
        )
        if element is None:
            raise self._fail(ElementNotFound, spec, started)

        # Later phases check the node captured above; the selector is not re-queried.
        if spec.require_visible:
            visible = await self._poll(lambda: element.evaluate(IS_VISIBLE_JS), deadline)
            if not visible:
                raise self._fail(ElementNotVisible, spec, started)

        if spec.require_enabled:
            enabled = await self._poll(lambda: element.evaluate(IS_ENABLED_JS), deadline)
            if not enabled:
                raise self._fail(ElementNotEnabled, spec, started)

        return element


async def wait_for_element(
    page: Page,
    selector: str,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    visible: bool = True,
    enabled: bool = True,
) -> ElementHandle:
    """Wait for ``selector`` to be ready for interaction."""
    spec = WaitSpec(
        selector=selector,
        timeout_ms=timeout_ms,
        require_visible=visible,
        require_enabled=enabled,
    )
    return await ElementProber(page).wait_for_element(spec)
