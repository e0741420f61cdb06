"""Upload files to a file input element."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

from playwright.async_api import Error as PlaywrightError

from browser_skill.cli import ScriptArgumentParser, run_script
from browser_skill.config import SkillConfig
from browser_skill.core.probe import wait_for_element
from browser_skill.core.session import open_session
from browser_skill.errors import InvalidArgument, UploadError

DEFAULT_SELECTOR = 'input[type="file"]'

USAGE = """Usage: browser-upload <file> [file2...] [--selector <selector>]

Upload files to a file input element. Auto-waits for input.

Options:
  --selector <sel>  Target specific file input (default: first input[type=file])

Examples:
  browser-upload ~/document.pdf
  browser-upload ~/doc.pdf --selector "input#resume"
  browser-upload file1.pdf file2.pdf"""


def build_parser() -> ScriptArgumentParser:
    parser = ScriptArgumentParser("browser-upload", USAGE)
    parser.add_argument("files", nargs="*")
    parser.add_argument("--selector", default=DEFAULT_SELECTOR)
    return parser


def resolve_files(paths: Sequence[str]) -> list[str]:
    """Expand ``~`` and symlinks; every file must exist."""
    if not paths:
        raise InvalidArgument("No files specified")

    resolved: list[str] = []
    for path in paths:
        candidate = os.path.abspath(os.path.expanduser(path))
        if not os.path.exists(candidate):
            raise InvalidArgument(f"File not found: {path}")
        resolved.append(os.path.realpath(candidate))
    return resolved


async def main(args: argparse.Namespace, config: SkillConfig) -> str:
    if not args.selector:
        raise InvalidArgument("Missing selector after --selector flag")
    files = resolve_files(args.files)

    async with open_session(config) as session:
        # File inputs are usually hidden behind a styled button.
        element = await wait_for_element(session.active_page(), args.selector, visible=False, enabled=True)
        try:
            await element.set_input_files(files)
        except PlaywrightError as exc:
            raise UploadError(str(exc)) from exc

    return "Uploaded: " + ", ".join(os.path.basename(path) for path in files)


def run(argv: Optional[Sequence[str]] = None) -> None:
    run_script(build_parser(), main, argv, error_prefix="Upload failed")


if __name__ == "__main__":
    run()
