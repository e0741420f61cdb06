"""Navigate to a URL and print its readable content as Markdown."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from playwright.async_api import Error as PlaywrightError

from browser_skill.cli import ScriptArgumentParser, run_script, validate_url
from browser_skill.config import SkillConfig
from browser_skill.core.content import ExtractedPage, extract_markdown
from browser_skill.core.session import open_session
from browser_skill.errors import ExtractionFailure

logger = logging.getLogger("browser_skill.scripts.content")

LOAD_TIMEOUT_MS = 15_000

USAGE = """Usage: browser-content <url>

Navigate to URL and extract readable content as markdown.
Uses Readability for article extraction.

Examples:
  browser-content https://example.com
  browser-content https://en.wikipedia.org/wiki/Rust_(programming_language)"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-content", USAGE)
    parser.add_argument("url")
    return parser


def render_page(page: ExtractedPage) -> str:
    lines = [f"URL: {page.url}"]
    if page.title:
        lines.append(f"Title: {page.title}")
    lines.append("")
    lines.append(page.content)
    return "\n".join(lines)


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    url = validate_url(args.url)

    async with open_session(config) as session:
        page = session.active_page()
        # Busy pages never reach network idle; take whatever has loaded by then.
        try:
            await page.goto(url, wait_until="networkidle", timeout=LOAD_TIMEOUT_MS)
        except PlaywrightError as exc:
            logger.info(f"Load of {url} did not settle: {exc}")

        try:
            html = await session.full_html(page)
        except PlaywrightError as exc:
            raise ExtractionFailure(str(exc)) from exc
        final_url = page.url

    return render_page(extract_markdown(html, final_url))


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Content extraction failed")


if __name__ == "__main__":
    run()
