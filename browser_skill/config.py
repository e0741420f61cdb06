"""Environment-driven configuration for the browser-skill scripts."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field

from browser_skill.errors import InvalidArgument


DEFAULT_CDP_URL = "http://localhost:9222"


@dataclass
class SkillConfig:
    """Configuration shared by all scripts."""
    cdp_url: str = DEFAULT_CDP_URL
    connection_timeout_ms: int = 5000
    log_level: str = "WARNING"
    screenshot_dir: str = field(default_factory=tempfile.gettempdir)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidArgument(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise InvalidArgument(f"{name} must be positive, got {value}")
    return value


def load_config() -> SkillConfig:
    """Get configuration from environment variables."""
    return SkillConfig(
        cdp_url=os.getenv("BROWSER_SKILL_CDP_URL", DEFAULT_CDP_URL),
        connection_timeout_ms=_int_env("BROWSER_SKILL_CONNECT_TIMEOUT_MS", 5000),
        log_level=os.getenv("BROWSER_SKILL_LOG_LEVEL", "WARNING").upper(),
        screenshot_dir=os.getenv("BROWSER_SKILL_SCREENSHOT_DIR") or tempfile.gettempdir(),
    )
