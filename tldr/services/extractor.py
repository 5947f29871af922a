from __future__ import annotations

import math
import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from tldr.core.constants import STRIPPED_TAGS, WORDS_PER_MINUTE
from tldr.schemas.summaries import ArticleMetadata

_WHITESPACE_RE = re.compile(r"\s+")

# Candidate (attribute, value) pairs on <meta> tags, in order of preference.
_TITLE_META = (("property", "og:title"), ("name", "twitter:title"))
_DESCRIPTION_META = (("property", "og:description"), ("name", "description"), ("name", "twitter:description"))
_IMAGE_META = (("property", "og:image"), ("property", "og:image:url"), ("name", "twitter:image"))
_SITE_NAME_META = (("property", "og:site_name"), ("name", "application-name"))
_PUBLISHED_META = (("property", "article:published_time"), ("property", "og:published_time"), ("name", "date"))
_AUTHOR_META = (("name", "author"), ("property", "article:author"), ("name", "twitter:creator"))


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _as_soup(document: str | BeautifulSoup) -> BeautifulSoup:
    return document if isinstance(document, BeautifulSoup) else parse_html(document)


def _collapse(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def extract_text(document: str | BeautifulSoup) -> str:
    """
    Reduce a page to a single line of plain text.

    A parsed document has its script, style and embed elements removed in place.
    """
    soup = _as_soup(document)
    for tag in soup(list(STRIPPED_TAGS)):
        tag.decompose()
    root = soup.body or soup
    return _collapse(root.get_text(" "))


def _meta_content(soup: BeautifulSoup, candidates: tuple[tuple[str, str], ...]) -> str | None:
    for attr, value in candidates:
        # Some sites put Open Graph keys under name= instead of property=.
        for key in (attr, "name" if attr == "property" else "property"):
            tag = soup.find("meta", attrs={key: value})
            if isinstance(tag, Tag):
                content = tag.get("content")
                if isinstance(content, str) and content.strip():
                    return _collapse(content)
    return None


def _document_title(soup: BeautifulSoup) -> str | None:
    if soup.title and soup.title.string:
        return _collapse(soup.title.string) or None
    return None


def _first_time_element(soup: BeautifulSoup) -> str | None:
    tag = soup.find("time", attrs={"datetime": True})
    if isinstance(tag, Tag):
        value = tag.get("datetime")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def estimate_read_time(text: str) -> str:
    words = len(text.split())
    return f"{math.ceil(words / WORDS_PER_MINUTE)} min"


def extract_metadata(document: str | BeautifulSoup, url: str, text: str | None = None) -> ArticleMetadata:
    """
    Build the metadata record from the document head.

    Each field falls back through its candidate sources; fields with no source
    are left unset. The read time is computed from `text` (or the page text
    when not given) and left unset for pages without words.
    """
    soup = _as_soup(document)
    if text is None:
        # Stripping leaves <meta>, <title> and <time> in place.
        text = extract_text(soup)

    image = _meta_content(soup, _IMAGE_META)
    if image:
        image = urljoin(url, image)

    return ArticleMetadata(
        url=url,
        title=_meta_content(soup, _TITLE_META) or _document_title(soup),
        description=_meta_content(soup, _DESCRIPTION_META),
        image=image,
        site_name=_meta_content(soup, _SITE_NAME_META),
        published_time=_meta_content(soup, _PUBLISHED_META) or _first_time_element(soup),
        author=_meta_content(soup, _AUTHOR_META),
        estimated_read_time=estimate_read_time(text) if text.split() else None,
    )
