"""Search Google through the attached browser and print the results as JSON."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

from playwright.async_api import Error as PlaywrightError, Page

from browser_skill.cli import ScriptArgumentParser, format_json, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.content import extract_text
from browser_skill.core.session import BrowserSession, open_session
from browser_skill.errors import InvalidArgument

logger = logging.getLogger("browser_skill.scripts.search")

SEARCH_TIMEOUT_S = 60
DEFAULT_RESULTS = 5
PAGE_SIZE = 10
MAX_START = 100
RESULT_SELECTOR = "div.MjjYud"
SEARCH_LOAD_TIMEOUT_MS = 15_000
RESULT_WAIT_TIMEOUT_MS = 5_000
CONTENT_LOAD_TIMEOUT_MS = 10_000
CONTENT_LIMIT = 5000
FETCH_ERROR = "(Error fetching content)"
URI_COMPONENT_SAFE = "!*'()"

USAGE = """Usage: browser-search "<query>" [-n <num>] [--content]

Search Google and return results.

Options:
  -n <num>    Number of results (default: 5)
  --content   Fetch readable content from each result

Quote the query when it contains words starting with "-".

Examples:
  browser-search "rust programming"
  browser-search "climate change" -n 10
  browser-search "machine learning" -n 3 --content
  browser-search 'rust -java'"""

EXTRACT_RESULTS_JS = """
(selector) => {
    const items = [];
    for (const result of document.querySelectorAll(selector)) {
        const titleEl = result.querySelector('h3');
        const linkEl = result.querySelector('a');
        const snippetEl = result.querySelector('div.VwiC3b, div[data-sncf]');
        if (titleEl && linkEl && linkEl.href && !linkEl.href.startsWith('https://www.google.com')) {
            items.push({
                title: (titleEl.textContent || '').trim(),
                link: linkEl.href,
                snippet: ((snippetEl && snippetEl.textContent) || '').trim(),
            });
        }
    }
    return items;
}
"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-search", USAGE)
    parser.add_argument("query", nargs="*")
    parser.add_argument("-n", dest="num", default=str(DEFAULT_RESULTS))
    parser.add_argument("--content", action="store_true")
    return parser


def parse_count(raw: str) -> int:
    try:
        count = int(raw)
    except ValueError:
        raise InvalidArgument("Invalid number of results") from None
    if count < 1:
        raise InvalidArgument("Invalid number of results")
    return count


def search_url(query: str, start: int) -> str:
    # Same escaping as JavaScript's encodeURIComponent.
    return f"https://www.google.com/search?q={quote(query, safe=URI_COMPONENT_SAFE)}&start={start}"


async def collect_results(page: Page, query: str, limit: int) -> list[dict[str, Any]]:
    """Walk result pages until ``limit`` unique links are collected."""
    results: list[dict[str, Any]] = []
    seen: set[str] = set()
    start = 0

    while len(results) < limit:
        await page.goto(search_url(query, start), wait_until="domcontentloaded", timeout=SEARCH_LOAD_TIMEOUT_MS)
        try:
            await page.wait_for_selector(RESULT_SELECTOR, timeout=RESULT_WAIT_TIMEOUT_MS)
        except PlaywrightError:
            logger.info(f"No {RESULT_SELECTOR} on result page start={start}")

        page_results = await page.evaluate(EXTRACT_RESULTS_JS, RESULT_SELECTOR)
        if not page_results:
            break

        for item in page_results:
            if len(results) >= limit:
                break
            if item["link"] in seen:
                continue
            seen.add(item["link"])
            results.append(item)

        start += PAGE_SIZE
        if start >= MAX_START:
            break

    return results


async def attach_content(session: BrowserSession, page: Page, results: list[dict[str, Any]]) -> None:
    """Fetch each result in turn; a failure only affects that result."""
    for result in results:
        try:
            try:
                await page.goto(result["link"], wait_until="networkidle", timeout=CONTENT_LOAD_TIMEOUT_MS)
            except PlaywrightError as exc:
                logger.info(f"Load of {result['link']} did not settle: {exc}")
            html = await session.full_html(page)
            result["content"] = extract_text(html, page.url, limit=CONTENT_LIMIT)
        except Exception as exc:
            logger.warning(f"Could not fetch {result['link']}: {exc}")
            result["content"] = FETCH_ERROR


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    limit = parse_count(args.num)
    query = " ".join(args.query)
    if not query:
        raise InvalidArgument("Search query is required")

    async with open_session(config) as session:
        page = session.active_page()
        results = await collect_results(page, query, limit)
        if results and args.content:
            await attach_content(session, page, results)

    return format_json(results)


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Search failed", timeout_s=SEARCH_TIMEOUT_S)


if __name__ == "__main__":
    run()
