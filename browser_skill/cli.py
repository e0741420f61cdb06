"""
Shared runtime for the browser-skill command-line scripts.

Every script prints its result on stdout, reports failures as a single
``{"error": ...}`` JSON line on stderr and exits 0 on success, 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
import threading
from typing import Any, Awaitable, Callable, Optional, Sequence
from urllib.parse import urlparse

from browser_skill.config import SkillConfig, load_config
from browser_skill.errors import (
    BrowserConnectionError,
    BrowserSkillError,
    InvalidArgument,
    ScriptTimeout,
)

logger = logging.getLogger("browser_skill.cli")

DEFAULT_TIMEOUT_S = 30

ScriptMain = Callable[[argparse.Namespace, SkillConfig], Awaitable[Optional[str]]]


class ScriptArgumentParser(argparse.ArgumentParser):
    """argparse with the scripts' usage conventions.

    ``-h/--help`` prints the usage text to stderr and exits 0; a bare
    invocation of a script that needs arguments prints it and exits 1; any
    other parse problem becomes ``InvalidArgument``.
    """

    def __init__(self, prog: str, usage_text: str, requires_args: bool = True) -> None:
        super().__init__(prog=prog, add_help=False)
        self.usage_text = usage_text
        self.requires_args = requires_args

    def print_usage(self, file: Any = None) -> None:
        print(self.usage_text, file=file or sys.stderr)

    def print_help(self, file: Any = None) -> None:
        print(self.usage_text, file=file or sys.stderr)

    def error(self, message: str) -> None:  # type: ignore[override]
        raise InvalidArgument(message)

    def parse_script_args(self, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
        args = list(sys.argv[1:] if argv is None else argv)
        if "-h" in args or "--help" in args:
            self.print_help()
            self.exit(0)
        if self.requires_args and not args:
            self.print_usage()
            self.exit(1)
        return self.parse_intermixed_args(args)


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def write_error(message: str) -> None:
    print(json.dumps({"error": message}, ensure_ascii=False), file=sys.stderr, flush=True)


def exit_error(message: str) -> None:
    write_error(message)
    sys.exit(1)


def install_global_timeout(seconds: float) -> threading.Timer:
    """Hard process deadline. Fires regardless of what the script is doing."""

    def expire() -> None:
        write_error(ScriptTimeout(f"Timeout after {seconds:g}s").message)
        os._exit(1)

    timer = threading.Timer(seconds, expire)
    timer.daemon = True
    timer.start()
    return timer


def validate_url(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise InvalidArgument(f"Invalid URL: {url}")
    return url


def format_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def run_script(
    parser: ScriptArgumentParser,
    main: ScriptMain,
    argv: Optional[Sequence[str]] = None,
    *,
    error_prefix: str,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> None:
    """Parse arguments, run ``main`` once and report the outcome."""
    timer = install_global_timeout(timeout_s)
    try:
        try:
            config = load_config()
            setup_logging(config.log_level)
            args = parser.parse_script_args(argv)
        except InvalidArgument as exc:
            exit_error(exc.message)
            return

        try:
            output = asyncio.run(main(args, config))
        except (InvalidArgument, BrowserConnectionError) as exc:
            exit_error(exc.message)
            return
        except BrowserSkillError as exc:
            exit_error(f"{error_prefix}: {exc.message}")
            return
        except Exception as exc:
            logger.debug("Script failed", exc_info=True)
            exit_error(f"{error_prefix}: {exc}")
            return

        if output is not None:
            print(output, flush=True)
    finally:
        timer.cancel()
