"""Type text into an input, working with React/Vue controlled inputs."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from browser_skill.cli import ScriptArgumentParser, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.probe import wait_for_element
from browser_skill.core.session import open_session

USAGE = """Usage: browser-type <selector> <text> [--clear]

Type text into an input element. Auto-waits for element.
Works with React/Vue controlled inputs automatically.

Options:
  --clear  Clear existing value before typing

Examples:
  browser-type "#email" "user@example.com"
  browser-type "textarea.description" "Long text here"
  browser-type "#search" "query" --clear"""

# Frameworks that track the value through the prototype setter ignore a plain
# assignment, so fall back to the native setter before firing events.
SET_VALUE_JS = """
(el, {value, clear}) => {
    if (clear) {
        el.value = '';
    }
    el.value = value;
    if (el.value !== value) {
        const proto = el.tagName === 'TEXTAREA'
            ? HTMLTextAreaElement.prototype
            : HTMLInputElement.prototype;
        const setter = Object.getOwnPropertyDescriptor(proto, 'value')?.set;
        if (setter) {
            setter.call(el, value);
        }
    }
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
    el.dispatchEvent(new FocusEvent('blur', { bubbles: true }));
}
"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-type", USAGE)
    parser.add_argument("selector")
    parser.add_argument("text", nargs="+")
    parser.add_argument("--clear", action="store_true")
    return parser


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    text = " ".join(args.text)

    async with open_session(config) as session:
        element = await wait_for_element(session.active_page(), args.selector)
        await element.evaluate(SET_VALUE_JS, {"value": text, "clear": args.clear})

    return f"Typed into: {args.selector}"


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Type failed")


if __name__ == "__main__":
    run()
