"""HTML to Markdown conversion shared by the content and search scripts."""

from __future__ import annotations

import re

from markdownify import ATX, MarkdownConverter

EMPTY_LINK_RE = re.compile(r"\[\\?\[\s*\\?\]\]\([^)]*\)|(?<!!)\[\s*\]\([^)]*\)")
MULTI_SPACE_RE = re.compile(r" +")
SPACE_BEFORE_COMMA_RE = re.compile(r"\s+,")
SPACE_BEFORE_PERIOD_RE = re.compile(r"\s+\.")
MULTI_NEWLINE_RE = re.compile(r"\n{3,}")


class SkillMarkdownConverter(MarkdownConverter):
    """GFM-flavoured converter that drops links without text."""

    def convert_a(self, el, text, *args, **kwargs):
        if not el.get_text().strip():
            return ""
        return super().convert_a(el, text, *args, **kwargs)

    def convert_del(self, el, text, *args, **kwargs):
        if not text.strip():
            return ""
        return f"~~{text.strip()}~~"

    convert_s = convert_del
    convert_strike = convert_del


def html_to_markdown(html: str) -> str:
    converter = SkillMarkdownConverter(heading_style=ATX, bullets="*", code_language="")
    markdown = converter.convert(html)
    markdown = EMPTY_LINK_RE.sub("", markdown)
    markdown = MULTI_SPACE_RE.sub(" ", markdown)
    markdown = SPACE_BEFORE_COMMA_RE.sub(",", markdown)
    markdown = SPACE_BEFORE_PERIOD_RE.sub(".", markdown)
    markdown = MULTI_NEWLINE_RE.sub("\n\n", markdown)
    return markdown.strip()
