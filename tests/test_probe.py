"""
Tests for the element readiness prober.
"""

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from browser_skill.core.probe import (
    IS_ENABLED_JS,
    IS_VISIBLE_JS,
    ElementProber,
    WaitSpec,
    wait_for_element,
)
from browser_skill.errors import (
    ElementNotEnabled,
    ElementNotFound,
    ElementNotVisible,
    InvalidArgument,
)


def make_handle(visible=(True,), enabled=(True,)):
    """Element handle whose predicates answer from the given sequences.

    The last answer repeats once a sequence is exhausted.
    """
    answers = {IS_VISIBLE_JS: list(visible), IS_ENABLED_JS: list(enabled)}

    async def evaluate(script, *args):
        queue = answers[script]
        return queue.pop(0) if len(queue) > 1 else queue[0]

    handle = MagicMock()
    handle.evaluate = AsyncMock(side_effect=evaluate)
    return handle


def make_prober(page, clock):
    return ElementProber(page, poll_interval_ms=100, clock=clock, sleep=clock.sleep)


class TestWaitSpec:
    """Tests for WaitSpec."""

    def test_defaults(self):
        spec = WaitSpec(selector="#go")

        assert spec.timeout_ms == 5000
        assert spec.require_visible is True
        assert spec.require_enabled is True

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(InvalidArgument):
            WaitSpec(selector="#go", timeout_ms=0)

    def test_rejects_empty_selector(self):
        with pytest.raises(InvalidArgument):
            WaitSpec(selector="")


@pytest.mark.asyncio
class TestElementProber:
    """Async tests for ElementProber."""

    async def test_returns_ready_element_without_waiting(self, page, clock):
        handle = make_handle()
        page.query_selector.return_value = handle

        result = await make_prober(page, clock).wait_for_element(WaitSpec(selector="#go"))

        assert result is handle
        assert clock.sleeps == []

    async def test_polls_until_element_appears(self, page, clock):
        handle = make_handle()
        page.query_selector.side_effect = [None, None, handle]

        result = await make_prober(page, clock).wait_for_element(WaitSpec(selector="#go"))

        assert result is handle
        assert clock.sleeps == [pytest.approx(0.1), pytest.approx(0.1)]

    async def test_missing_element_fails_with_not_found_near_timeout(self, page, clock):
        page.query_selector.return_value = None

        with pytest.raises(ElementNotFound) as exc_info:
            await make_prober(page, clock).wait_for_element(WaitSpec(selector="#missing", timeout_ms=1000))

        assert 1.0 - 1e-9 <= clock.now <= 1.1
        assert exc_info.value.code == "NOT_FOUND"
        assert "Element not found: #missing" in str(exc_info.value)

    async def test_sleep_never_overshoots_deadline(self, page, clock):
        page.query_selector.return_value = None

        with pytest.raises(ElementNotFound):
            await make_prober(page, clock).wait_for_element(WaitSpec(selector="#missing", timeout_ms=250))

        assert sum(clock.sleeps) == pytest.approx(0.25)
        assert all(s <= 0.1 + 1e-9 for s in clock.sleeps)
        assert clock.sleeps[2] == pytest.approx(0.05)

    async def test_hidden_element_fails_with_not_visible(self, page, clock):
        page.query_selector.return_value = make_handle(visible=(False,))

        with pytest.raises(ElementNotVisible) as exc_info:
            await make_prober(page, clock).wait_for_element(WaitSpec(selector="#hidden", timeout_ms=500))

        assert not isinstance(exc_info.value, ElementNotFound)
        assert "Element not visible: #hidden" in str(exc_info.value)

    async def test_disabled_element_fails_with_not_enabled(self, page, clock):
        page.query_selector.return_value = make_handle(enabled=(False,))

        with pytest.raises(ElementNotEnabled) as exc_info:
            await make_prober(page, clock).wait_for_element(WaitSpec(selector="#off", timeout_ms=500))

        assert "Element disabled: #off" in str(exc_info.value)

    async def test_phases_share_one_deadline(self, page, clock):
        handle = make_handle(visible=(False,))

        async def slow_query(selector):
            clock.now += 0.4
            return handle

        page.query_selector.side_effect = slow_query

        with pytest.raises(ElementNotVisible):
            await make_prober(page, clock).wait_for_element(WaitSpec(selector="#go", timeout_ms=500))

        assert clock.now == pytest.approx(0.5)

    async def test_exhausted_deadline_fails_visibility_without_polling(self, page, clock):
        handle = make_handle()

        async def late_query(selector):
            clock.now += 6.0
            return handle

        page.query_selector.side_effect = late_query

        with pytest.raises(ElementNotVisible):
            await make_prober(page, clock).wait_for_element(WaitSpec(selector="#go", timeout_ms=5000))

        handle.evaluate.assert_not_awaited()
        assert clock.sleeps == []

    async def test_captured_node_is_not_requeried(self, page, clock):
        handle = make_handle(visible=(False, False, True))
        page.query_selector.return_value = handle

        result = await make_prober(page, clock).wait_for_element(WaitSpec(selector=".item"))

        assert result is handle
        page.query_selector.assert_awaited_once_with(".item")

    async def test_visibility_check_can_be_skipped(self, page, clock):
        page.query_selector.return_value = make_handle(visible=(False,))

        spec = WaitSpec(selector="input[type=file]", require_visible=False)
        result = await make_prober(page, clock).wait_for_element(spec)

        assert result is page.query_selector.return_value

    async def test_enabled_check_can_be_skipped(self, page, clock):
        handle = make_handle(enabled=(False,))
        page.query_selector.return_value = handle

        spec = WaitSpec(selector="#off", require_enabled=False)
        result = await make_prober(page, clock).wait_for_element(spec)

        assert result is handle
        scripts = [call.args[0] for call in handle.evaluate.await_args_list]
        assert IS_ENABLED_JS not in scripts


@pytest.mark.asyncio
async def test_wait_for_element_helper_uses_keyword_options(page):
    handle = make_handle(visible=(False,))
    page.query_selector.return_value = handle

    result = await wait_for_element(page, "#upload", visible=False, enabled=True)

    assert result is handle


READINESS_HTML = """
<html><body>
  <button id="ready">Go</button>
  <button id="hidden" style="display: none">Hidden</button>
  <div style="display: none"><button id="nested">Nested</button></div>
  <button id="faded" style="opacity: 0">Faded</button>
  <button id="off" disabled>Off</button>
  <input id="upload" type="file" style="display: none">
</body></html>
"""

SHORT_TIMEOUT_MS = 300


@pytest_asyncio.fixture
async def readiness_page(chromium_page):
    await chromium_page.set_content(READINESS_HTML)
    return chromium_page


@pytest.mark.integration
@pytest.mark.asyncio
class TestReadinessInBrowser:
    """Runs the in-page visibility and enabled checks against a real DOM."""

    async def test_ready_element(self, readiness_page):
        handle = await wait_for_element(readiness_page, "#ready", timeout_ms=SHORT_TIMEOUT_MS)

        assert await handle.text_content() == "Go"

    async def test_missing_element(self, readiness_page):
        with pytest.raises(ElementNotFound):
            await wait_for_element(readiness_page, "#nope", timeout_ms=SHORT_TIMEOUT_MS)

    @pytest.mark.parametrize("selector", ["#hidden", "#nested", "#faded"])
    async def test_hidden_elements_are_not_visible(self, readiness_page, selector):
        with pytest.raises(ElementNotVisible) as exc_info:
            await wait_for_element(readiness_page, selector, timeout_ms=SHORT_TIMEOUT_MS)

        assert not isinstance(exc_info.value, ElementNotFound)

    async def test_disabled_attribute_is_not_enabled(self, readiness_page):
        with pytest.raises(ElementNotEnabled):
            await wait_for_element(readiness_page, "#off", timeout_ms=SHORT_TIMEOUT_MS)

    async def test_hidden_file_input_without_visibility_check(self, readiness_page):
        handle = await wait_for_element(readiness_page, "#upload", timeout_ms=SHORT_TIMEOUT_MS, visible=False)

        assert await handle.get_attribute("type") == "file"

    async def test_element_added_later_is_found(self, readiness_page):
        await readiness_page.evaluate(
            """() => setTimeout(() => {
                const el = document.createElement('button');
                el.id = 'late';
                document.body.appendChild(el);
            }, 150)"""
        )

        handle = await wait_for_element(readiness_page, "#late", timeout_ms=3000)

        assert await handle.get_attribute("id") == "late"

    async def test_element_shown_later_is_visible(self, readiness_page):
        await readiness_page.evaluate(
            "() => setTimeout(() => { document.getElementById('hidden').style.display = ''; }, 150)"
        )

        handle = await wait_for_element(readiness_page, "#hidden", timeout_ms=3000)

        assert await handle.text_content() == "Hidden"
