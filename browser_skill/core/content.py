"""
Readable-content extraction.

Readability isolates the main article; when it finds nothing useful the
page is stripped of boilerplate and the largest semantic container is used
instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from browser_skill.core.markdown import html_to_markdown

logger = logging.getLogger("browser_skill.content")

BOILERPLATE_SELECTOR = "script, style, noscript, nav, header, footer, aside"
MAIN_SELECTOR = "main, article, [role='main'], .content, #content"
MIN_FALLBACK_LENGTH = 100
DEFAULT_TEXT_LIMIT = 5000
NO_CONTENT = "(Could not extract content)"
NO_TITLE = "[no-title]"


@dataclass
class Article:
    title: Optional[str]
    content: str


@dataclass
class ExtractedPage:
    url: str
    title: Optional[str]
    content: str


def parse_article(html: str, url: str) -> Optional[Article]:
    """Run readability over ``html``; None when it yields no text."""
    try:
        document = Document(html, url=url)
        content = document.summary(html_partial=True)
        title = document.title()
    except Unparseable as exc:
        logger.info(f"Readability could not parse {url}: {exc}")
        return None

    if not BeautifulSoup(content, "lxml").get_text().strip():
        return None
    if not title or title == NO_TITLE:
        title = None
    return Article(title=title, content=content)


def _fallback_soup(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, "lxml")
    for element in soup.select(BOILERPLATE_SELECTOR):
        element.decompose()
    return soup


def _main_container(soup: BeautifulSoup):
    return soup.select_one(MAIN_SELECTOR) or soup.body


def document_title(html: str) -> Optional[str]:
    soup = BeautifulSoup(html, "lxml")
    if soup.title and soup.title.string:
        return soup.title.string.strip() or None
    return None


def fallback_html(html: str) -> str:
    main = _main_container(_fallback_soup(html))
    return main.decode_contents() if main is not None else ""


def fallback_text(html: str) -> str:
    main = _main_container(_fallback_soup(html))
    return main.get_text() if main is not None else ""


def extract_markdown(html: str, url: str) -> ExtractedPage:
    article = parse_article(html, url)
    if article is not None:
        return ExtractedPage(url=url, title=article.title, content=html_to_markdown(article.content))

    logger.info(f"No article found on {url}, using fallback container")
    inner = fallback_html(html)
    if len(inner.strip()) > MIN_FALLBACK_LENGTH:
        content = html_to_markdown(inner)
    else:
        content = NO_CONTENT
    return ExtractedPage(url=url, title=document_title(html), content=content)


def extract_text(html: str, url: str, limit: int = DEFAULT_TEXT_LIMIT) -> str:
    article = parse_article(html, url)
    if article is not None:
        return html_to_markdown(article.content)[:limit]

    text = fallback_text(html).strip()
    if len(text) > MIN_FALLBACK_LENGTH:
        return text[:limit]
    return NO_CONTENT
