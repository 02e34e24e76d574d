"""Document-level metadata harvesting.

Reads descriptor tags (``<meta>``, ``<link rel=canonical>``, ``<title>``,
``<html lang>``) independently of where the article body was located.
Nothing here raises on sparse markup: a missing field is ``None``, which is
distinct from a field that is present but empty (``""``).

Descriptor lookup is dual-keyed: ``<meta name="KEY">`` or
``<meta property="KEY">``, whichever comes first in the document.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any
from urllib.parse import urljoin, urlparse

import dateparser

from readlater.extractors.main_content import first_paragraph_text
from readlater.settings import (
    ELLIPSIS,
    MAX_PUBLISHED_YEAR,
    MIN_PUBLISHED_YEAR,
    SUMMARY_LENGTH,
    UNTITLED,
)
from readlater.tree import MarkupNode, find_first, iter_elements

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _first(*values: Any) -> Any:
    """Return the first non-empty, non-None value."""
    for v in values:
        if v:
            return v
    return None


def truncate(text: str, length: int = SUMMARY_LENGTH, ellipsis: str = ELLIPSIS) -> str:
    """Cut *text* to *length* characters, appending *ellipsis* only if cut."""
    if len(text) <= length:
        return text
    return text[:length] + ellipsis


def _parse_date(raw: str | None) -> str | None:
    """Parse a date string to ISO 8601.

    Returns None on failure or when the year falls outside the sanity window.
    """
    if not raw:
        return None
    raw = _WS_RE.sub(" ", raw.strip())
    try:
        parsed = dateparser.parse(
            raw,
            settings={
                "RETURN_AS_TIMEZONE_AWARE": True,
                "PREFER_DAY_OF_MONTH": "first",
                "PREFER_LOCALE_DATE_ORDER": False,
            },
        )
    except Exception as exc:
        logger.debug("Date parse failed for %r: %s", raw, exc)
        return None
    if parsed is None or not (MIN_PUBLISHED_YEAR <= parsed.year <= MAX_PUBLISHED_YEAR):
        return None
    return parsed.isoformat()


# ---------------------------------------------------------------------------
# Descriptor lookup
# ---------------------------------------------------------------------------

def find_meta_tags(root: MarkupNode) -> list[MarkupNode]:
    """Return every ``<meta>`` element under *root* in document order."""
    return [el for el in iter_elements(root, include_self=True) if el.tag == "meta"]


def meta_content(metas: Sequence[MarkupNode], key: str) -> str | None:
    """Return the ``content`` of the first descriptor named *key*.

    A descriptor matches when its ``name`` or ``property`` equals *key*
    (case-insensitively).  Returns None when no descriptor matches or the
    matching one has no ``content`` attribute.
    """
    key = key.lower()
    for meta in metas:
        attrs = meta.attrs
        if attrs.get("name", "").lower() == key or attrs.get("property", "").lower() == key:
            return attrs.get("content")
    return None


def extract_tags(metas: Sequence[MarkupNode]) -> list[str]:
    """Split the ``keywords`` descriptor on commas into trimmed, non-empty tags."""
    raw = meta_content(metas, "keywords")
    if raw is None:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def extract_title(root: MarkupNode, metas: Sequence[MarkupNode]) -> str:
    title_tag = find_first(root, "title", include_self=True)
    h1_tag = find_first(root, "h1", include_self=True)
    og_title = meta_content(metas, "og:title")
    return _first(
        title_tag.text().strip() if title_tag else None,
        og_title.strip() if og_title else None,
        h1_tag.text().strip() if h1_tag else None,
    ) or UNTITLED


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def derive_summary(
    metas: Sequence[MarkupNode],
    pruned: MarkupNode,
    content: str,
    *,
    length: int = SUMMARY_LENGTH,
    ellipsis: str = ELLIPSIS,
) -> str:
    """Return the summary: description descriptor, else first paragraph, else content."""
    description = meta_content(metas, "description")
    if description is not None:
        return description

    paragraph = first_paragraph_text(pruned)
    if paragraph is not None:
        return truncate(paragraph, length, ellipsis)
    return truncate(content, length, ellipsis)


# ---------------------------------------------------------------------------
# Extended fields
# ---------------------------------------------------------------------------

def _extract_domain(page_url: str) -> str | None:
    if not page_url:
        return None
    try:
        host = urlparse(page_url).hostname
    except ValueError:
        logger.debug("Unparseable page URL %r", page_url)
        return None
    if not host:
        return None
    return host[4:] if host.startswith("www.") else host


def _extract_language(root: MarkupNode, metas: Sequence[MarkupNode]) -> str | None:
    html_tag = find_first(root, "html", include_self=True)
    if html_tag is not None:
        lang = html_tag.attrs.get("lang", "").strip()
        if lang:
            return lang[:10]

    locale = (meta_content(metas, "og:locale") or "").strip()
    if locale:
        return locale.replace("_", "-").split("-")[0][:5]
    return None


def _extract_canonical(root: MarkupNode, metas: Sequence[MarkupNode], page_url: str) -> str | None:
    for link in iter_elements(root, include_self=True):
        if link.tag != "link":
            continue
        attrs = link.attrs
        if "canonical" in attrs.get("rel", "").lower().split():
            href = attrs.get("href", "").strip()
            if href:
                return urljoin(page_url, href) if page_url else href

    og_url = (meta_content(metas, "og:url") or "").strip()
    return og_url or None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def harvest_metadata(
    root: MarkupNode,
    page_url: str = "",
    *,
    metas: Sequence[MarkupNode] | None = None,
    extended: bool = True,
) -> dict[str, Any]:
    """Harvest descriptor-level metadata from the document rooted at *root*.

    Args:
        root:     Document root.
        page_url: Page URL, used for the domain and canonical resolution.
        metas:    Pre-collected ``<meta>`` elements (saves one tree walk).
        extended: Also compute domain, language, canonical URL and the
                  ISO-8601 ``published_at``.

    Returns a dict with keys:
        title, tags, author, published_time, site_name, type, image
        and, when *extended*: domain, language, canonical_url, published_at
    """
    if metas is None:
        metas = find_meta_tags(root)

    published_time = (
        meta_content(metas, "article:published_time")
        or meta_content(metas, "published_time")
    )

    meta: dict[str, Any] = {
        "title": extract_title(root, metas),
        "tags": extract_tags(metas),
        "author": meta_content(metas, "author"),
        "published_time": published_time,
        "site_name": meta_content(metas, "og:site_name"),
        "type": meta_content(metas, "og:type"),
        "image": meta_content(metas, "og:image"),
    }
    if extended:
        meta.update(
            domain=_extract_domain(page_url),
            language=_extract_language(root, metas),
            canonical_url=_extract_canonical(root, metas, page_url),
            published_at=_parse_date(published_time),
        )
    return meta
