"""Error taxonomy shared by every browser-skill script."""

from __future__ import annotations


class BrowserSkillError(Exception):
    """Base class. ``code`` is stable and safe to match on."""

    code = "BROWSER_SKILL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BrowserConnectionError(BrowserSkillError):
    code = "CONNECTION_ERROR"


class InvalidArgument(BrowserSkillError):
    code = "INVALID_ARGUMENT"


class ScriptTimeout(BrowserSkillError):
    code = "TIMEOUT"


class ExtractionFailure(BrowserSkillError):
    code = "EXTRACTION_FAILURE"


class UploadError(BrowserSkillError):
    code = "UPLOAD_ERROR"


class NavigationError(BrowserSkillError):
    code = "NAVIGATION_ERROR"


class ElementNotReady(BrowserSkillError):
    """An element failed one of the readiness phases before the deadline."""

    reason = "not ready"

    def __init__(self, selector: str, waited_ms: int) -> None:
        super().__init__(f"Element {self.reason}: {selector} (waited {waited_ms}ms)")
        self.selector = selector
        self.waited_ms = waited_ms


class ElementNotFound(ElementNotReady):
    code = "NOT_FOUND"
    reason = "not found"


class ElementNotVisible(ElementNotReady):
    code = "NOT_VISIBLE"
    reason = "not visible"


class ElementNotEnabled(ElementNotReady):
    code = "NOT_ENABLED"
    reason = "disabled"
