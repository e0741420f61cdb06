"""Interactive element picker: click to select DOM elements in the active tab."""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

from browser_skill.cli import ScriptArgumentParser, format_json, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.picker import ElementPicker, PickCancelled, PickMultiple, PickResult, PickSingle
from browser_skill.core.session import open_session

# Waits on a human, so the ceiling is well above the other scripts'.
PICK_TIMEOUT_S = 120

USAGE = """Usage: browser-pick "<message>"

Interactive element picker. Click to select, Cmd/Ctrl+Click for multi-select,
Enter to finish, ESC to cancel.

Examples:
  browser-pick "Click the submit button"
  browser-pick Select the product cards"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-pick", USAGE)
    parser.add_argument("message", nargs="+")
    return parser


def selections_for_output(result: PickResult) -> list[dict[str, Any]]:
    """Cancellation prints an empty list; a single pick is wrapped in one."""
    if isinstance(result, PickCancelled):
        return []
    if isinstance(result, PickSingle):
        return [result.selection.to_dict()]
    if isinstance(result, PickMultiple):
        return [selection.to_dict() for selection in result.selections]
    raise TypeError(f"Unexpected pick result: {result!r}")


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    message = " ".join(args.message)

    async with open_session(config) as session:
        result = await ElementPicker(session.active_page()).pick(message)

    return format_json(selections_for_output(result))


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Pick failed", timeout_s=PICK_TIMEOUT_S)


if __name__ == "__main__":
    run()
