"""Capture the current viewport and print the file path."""

from __future__ import annotations

import argparse
import os
from datetime import datetime, timezone
from typing import Optional, Sequence

from browser_skill.cli import ScriptArgumentParser, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.session import open_session
from browser_skill.errors import InvalidArgument

USAGE = """Usage: browser-screenshot

Capture the current viewport and return the file path.

Example:
  browser-screenshot"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-screenshot", USAGE, requires_args=False)
    parser.add_argument("extra", nargs="*")
    return parser


def screenshot_filename(now: Optional[datetime] = None) -> str:
    """``screenshot-2024-01-31T12-00-00-123Z.png`` (UTC, filesystem-safe)."""
    now = now or datetime.now(tz=timezone.utc)
    stamp = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    return f"screenshot-{stamp}-{now.microsecond // 1000:03d}Z.png"


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    if args.extra:
        raise InvalidArgument(f"Unknown argument: {args.extra[0]}")

    path = os.path.join(config.screenshot_dir, screenshot_filename())
    async with open_session(config) as session:
        await session.active_page().screenshot(path=path)
    return path


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Screenshot failed")


if __name__ == "__main__":
    run()
