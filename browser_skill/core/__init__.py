"""Core building blocks: CDP session, readiness prober, element picker, extraction."""

from browser_skill.errors import (
    BrowserConnectionError,
    BrowserSkillError,
    ElementNotEnabled,
    ElementNotFound,
    ElementNotReady,
    ElementNotVisible,
    ExtractionFailure,
    InvalidArgument,
    NavigationError,
    ScriptTimeout,
    UploadError,
)
from browser_skill.core.picker import (
    ElementPicker,
    PickCancelled,
    PickMultiple,
    PickResult,
    PickSelection,
    PickSingle,
)
from browser_skill.core.probe import ElementProber, WaitSpec, wait_for_element
from browser_skill.core.session import BrowserSession, open_session

__all__ = [
    "BrowserConnectionError",
    "BrowserSession",
    "BrowserSkillError",
    "ElementNotEnabled",
    "ElementNotFound",
    "ElementNotReady",
    "ElementNotVisible",
    "ElementPicker",
    "ElementProber",
    "ExtractionFailure",
    "InvalidArgument",
    "NavigationError",
    "PickCancelled",
    "PickMultiple",
    "PickResult",
    "PickSelection",
    "PickSingle",
    "ScriptTimeout",
    "UploadError",
    "WaitSpec",
    "open_session",
    "wait_for_element",
]
