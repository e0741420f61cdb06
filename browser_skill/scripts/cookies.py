"""Print every cookie for the active tab, httpOnly cookies included."""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

from browser_skill.cli import ScriptArgumentParser, format_json, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.session import open_session
from browser_skill.errors import InvalidArgument

USAGE = """Usage: browser-cookies

Get all cookies for the current tab including httpOnly cookies.

Example:
  browser-cookies"""

COOKIE_FIELDS = ("name", "value", "domain", "path", "httpOnly", "secure", "expires")


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-cookies", USAGE, requires_args=False)
    parser.add_argument("extra", nargs="*")
    return parser


def format_cookies(cookies: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{key: cookie.get(key) for key in COOKIE_FIELDS} for cookie in cookies]


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    if args.extra:
        raise InvalidArgument(f"Unknown argument: {args.extra[0]}")

    async with open_session(config) as session:
        page = session.active_page()
        cookies = await page.context.cookies([page.url])

    return format_json(format_cookies(cookies))


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Failed to get cookies")


if __name__ == "__main__":
    run()
