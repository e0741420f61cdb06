"""Navigate the active tab, or a new tab, to a URL."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from playwright.async_api import Error as PlaywrightError

from browser_skill.cli import ScriptArgumentParser, run_script, validate_url
from browser_skill.config import SkillConfig
from browser_skill.errors import NavigationError
from browser_skill.core.session import open_session

NAVIGATION_TIMEOUT_MS = 20_000

USAGE = """Usage: browser-navigate <url> [--new]

Options:
  --new  Open URL in a new tab instead of current tab

Examples:
  browser-navigate https://example.com       # Navigate current tab
  browser-navigate https://example.com --new # Open in new tab"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-navigate", USAGE)
    parser.add_argument("url")
    parser.add_argument("--new", action="store_true")
    return parser


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    url = validate_url(args.url)

    async with open_session(config) as session:
        page = await session.new_page() if args.new else session.active_page()
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS)
        except PlaywrightError as exc:
            raise NavigationError(str(exc)) from exc

    return f"Opened: {url}" if args.new else f"Navigated to: {url}"


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Navigation failed")


if __name__ == "__main__":
    run()
