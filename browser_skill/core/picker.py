"""
Interactive element picker.

Injects an overlay into the active page that lets a human click to select
one element, or Cmd/Ctrl+click several and press Enter. The page resolves a
tagged payload which is decoded into ``PickCancelled``, ``PickSingle`` or
``PickMultiple``.

All DOM event handling runs on the page's own event loop; handlers never
run concurrently, so the session state in the page needs no locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from playwright.async_api import Page

from browser_skill.errors import InvalidArgument

logger = logging.getLogger("browser_skill.picker")

PICKER_MARKER = "__browserSkillPick"

TEXT_LIMIT = 200
HTML_LIMIT = 500

# Returns true when it installed the picker, false when it was already there.
INSTALL_PICKER_JS = """
({marker, textLimit, htmlLimit}) => {
    if (typeof window[marker] === 'function') return false;

    const HIGHLIGHT_CSS =
        'position:absolute;border:2px solid #3b82f6;background:rgba(59,130,246,0.1);';

    const buildElementInfo = (el) => {
        const parents = [];
        let current = el.parentElement;
        while (current && current !== document.body) {
            const tag = current.tagName.toLowerCase();
            const id = current.id ? `#${current.id}` : '';
            const raw = typeof current.className === 'string'
                ? current.className
                : (current.getAttribute('class') || '');
            const tokens = raw.trim().split(/\\s+/).filter(Boolean);
            const cls = tokens.length ? `.${tokens.join('.')}` : '';
            parents.push(tag + id + cls);
            current = current.parentElement;
        }
        const rawClass = typeof el.className === 'string'
            ? el.className
            : el.getAttribute('class');
        const text = (el.textContent || '').trim().slice(0, textLimit);
        return {
            tag: el.tagName.toLowerCase(),
            id: el.id || null,
            class: rawClass || null,
            text: text || null,
            html: el.outerHTML.slice(0, htmlLimit),
            parents: parents.join(' > '),
        };
    };

    window[marker] = (message) => {
        if (!message) {
            throw new Error('pick() requires a message parameter');
        }
        return new Promise((resolve) => {
            const selections = [];
            const selected = new Set();
            const savedOutlines = new Map();

            const overlay = document.createElement('div');
            overlay.setAttribute('data-browser-skill-picker', 'overlay');
            overlay.style.cssText =
                'position:fixed;top:0;left:0;width:100%;height:100%;z-index:2147483647;pointer-events:none';

            const highlight = document.createElement('div');
            highlight.style.cssText = HIGHLIGHT_CSS + 'transition:all 0.1s';
            overlay.appendChild(highlight);

            const banner = document.createElement('div');
            banner.setAttribute('data-browser-skill-picker', 'banner');
            banner.style.cssText =
                'position:fixed;bottom:20px;left:50%;transform:translateX(-50%);background:#1f2937;' +
                'color:white;padding:12px 24px;border-radius:8px;font:14px sans-serif;' +
                'box-shadow:0 4px 12px rgba(0,0,0,0.3);pointer-events:auto;z-index:2147483647';

            const updateBanner = () => {
                banner.textContent =
                    `${message} (${selections.length} selected, ` +
                    'Cmd/Ctrl+click to add, Enter to finish, ESC to cancel)';
            };
            updateBanner();

            document.body.append(banner, overlay);

            const isOwn = (el) => !el || overlay.contains(el) || banner.contains(el);

            const finish = (payload) => {
                document.removeEventListener('mousemove', onMove, true);
                document.removeEventListener('click', onClick, true);
                document.removeEventListener('keydown', onKey, true);
                overlay.remove();
                banner.remove();
                selected.forEach((el) => {
                    el.style.outline = savedOutlines.get(el) || '';
                });
                resolve(payload);
            };

            const onMove = (e) => {
                const el = document.elementFromPoint(e.clientX, e.clientY);
                if (isOwn(el)) return;
                const r = el.getBoundingClientRect();
                highlight.style.cssText =
                    HIGHLIGHT_CSS +
                    `top:${r.top}px;left:${r.left}px;width:${r.width}px;height:${r.height}px`;
            };

            const onClick = (e) => {
                if (banner.contains(e.target)) return;
                e.preventDefault();
                e.stopPropagation();
                const el = document.elementFromPoint(e.clientX, e.clientY);
                if (isOwn(el)) return;

                if (e.metaKey || e.ctrlKey) {
                    if (selected.has(el)) return;
                    selected.add(el);
                    savedOutlines.set(el, el.style.outline);
                    el.style.outline = '3px solid #10b981';
                    selections.push(buildElementInfo(el));
                    updateBanner();
                    return;
                }

                if (selections.length > 0) {
                    finish({kind: 'multiple', selections: selections.slice()});
                } else {
                    finish({kind: 'single', selection: buildElementInfo(el)});
                }
            };

            const onKey = (e) => {
                if (e.key === 'Escape') {
                    e.preventDefault();
                    finish({kind: 'cancelled'});
                } else if (e.key === 'Enter' && selections.length > 0) {
                    e.preventDefault();
                    finish({kind: 'multiple', selections: selections.slice()});
                }
            };

            document.addEventListener('mousemove', onMove, true);
            document.addEventListener('click', onClick, true);
            document.addEventListener('keydown', onKey, true);
        });
    };
    return true;
}
"""

RUN_PICKER_JS = "({marker, message}) => window[marker](message)"


@dataclass(frozen=True)
class PickSelection:
    """Description of one chosen element."""
    tag: str
    id: Optional[str]
    class_name: Optional[str]
    text: Optional[str]
    html: str
    parents: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PickSelection":
        return cls(
            tag=payload["tag"],
            id=payload.get("id"),
            class_name=payload.get("class"),
            text=payload.get("text"),
            html=payload.get("html", ""),
            parents=payload.get("parents", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "id": self.id,
            "class": self.class_name,
            "text": self.text,
            "html": self.html,
            "parents": self.parents,
        }


@dataclass(frozen=True)
class PickCancelled:
    """The operator pressed Escape."""


@dataclass(frozen=True)
class PickSingle:
    selection: PickSelection


@dataclass(frozen=True)
class PickMultiple:
    selections: tuple[PickSelection, ...]


PickResult = Union[PickCancelled, PickSingle, PickMultiple]


def decode_pick_result(payload: Any) -> PickResult:
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected picker payload: {payload!r}")

    kind = payload.get("kind")
    if kind == "cancelled":
        return PickCancelled()
    if kind == "single":
        return PickSingle(PickSelection.from_payload(payload["selection"]))
    if kind == "multiple":
        return PickMultiple(tuple(PickSelection.from_payload(item) for item in payload["selections"]))
    raise ValueError(f"Unknown picker result kind: {kind!r}")


class ElementPicker:
    """Drives the in-page picker for one tab."""

    def __init__(self, page: Page) -> None:
        self._page = page

    async def ensure_installed(self) -> bool:
        installed = await self._page.evaluate(
            INSTALL_PICKER_JS,
            {"marker": PICKER_MARKER, "textLimit": TEXT_LIMIT, "htmlLimit": HTML_LIMIT},
        )
        if installed:
            logger.info("[Picker] Installed in page")
        return bool(installed)

    async def pick(self, message: str) -> PickResult:
        """
        Wait for the operator to finish picking.

        Blocks until Escape, Enter or a plain click in the page. Raises the
        Playwright error if the page navigates away or closes meanwhile.
        """
        if not message:
            raise InvalidArgument("pick() requires a message parameter")

        await self.ensure_installed()
        payload = await self._page.evaluate(RUN_PICKER_JS, {"marker": PICKER_MARKER, "message": message})
        result = decode_pick_result(payload)
        logger.info(f"[Picker] Resolved with {type(result).__name__}")
        return result
