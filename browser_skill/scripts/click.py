"""Click an element by CSS selector once it is present, visible and enabled."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from browser_skill.cli import ScriptArgumentParser, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.probe import wait_for_element
from browser_skill.core.session import open_session

USAGE = """Usage: browser-click <selector>

Click an element by CSS selector. Auto-waits for element to be:
- Present in DOM
- Visible (not hidden)
- Enabled (not disabled)

Examples:
  browser-click "#submit"
  browser-click "button.login"
  browser-click '[data-testid="save"]'"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-click", USAGE)
    parser.add_argument("selector", nargs="+")
    return parser


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    selector = " ".join(args.selector)

    async with open_session(config) as session:
        element = await wait_for_element(session.active_page(), selector)
        await element.click()

    return f"Clicked: {selector}"


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Click failed")


if __name__ == "__main__":
    run()
