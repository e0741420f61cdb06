"""Execute JavaScript in the active tab's page context."""

from __future__ import annotations

import argparse
import math
import os
import sys
from typing import Any, Optional, Sequence, TextIO

from browser_skill.cli import ScriptArgumentParser, format_json, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.session import open_session
from browser_skill.errors import InvalidArgument

USAGE = """Usage: browser-evaluate '<code>'
       browser-evaluate -f <file>
       echo '<code>' | browser-evaluate

Execute JavaScript in the active tab. Code runs in async page context.

Options:
  -f, --file <path>  Read code from file (avoids shell escaping issues)
  (stdin)            Pipe code via stdin for complex scripts

Examples:
  browser-evaluate 'document.title'
  browser-evaluate -f ./scrape.js
  echo 'document.querySelectorAll("a").length' | browser-evaluate"""

# Playwright maps both undefined and null to None, so report undefined separately.
EVALUATE_JS = """
async (code) => {
    const AsyncFunction = (async () => {}).constructor;
    const value = await new AsyncFunction(`return (${code})`)();
    if (value === undefined) return { type: 'undefined', value: null };
    return { type: typeof value, value };
}
"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-evaluate", USAGE, requires_args=False)
    parser.add_argument("code", nargs="*")
    parser.add_argument("-f", "--file", dest="file")
    return parser


def resolve_code(args: argparse.Namespace, stdin: TextIO) -> Optional[str]:
    """Code from ``--file``, the arguments, or piped stdin, in that order."""
    if args.file is not None:
        if not os.path.exists(args.file):
            raise InvalidArgument(f"File not found: {args.file}")
        with open(args.file, "r", encoding="utf-8") as handle:
            return handle.read()

    if args.code:
        return " ".join(args.code)

    if not stdin.isatty():
        code = stdin.read().strip()
        if not code:
            raise InvalidArgument("No code provided via stdin")
        return code

    return None


def format_result(kind: str, value: Any) -> str:
    """Render a page value the way JavaScript's ``String()`` would."""
    if kind == "undefined":
        return "undefined"
    if value is None:
        return "null"
    if kind == "object" or isinstance(value, (dict, list)):
        return format_json(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        # String() switches to exponent notation from 1e21 upward.
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    code = resolve_code(args, sys.stdin)
    if code is None:
        print(USAGE, file=sys.stderr)
        raise SystemExit(1)

    async with open_session(config) as session:
        result = await session.active_page().evaluate(EVALUATE_JS, code)

    return format_result(result["type"], result["value"])


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Evaluation failed")


if __name__ == "__main__":
    run()
