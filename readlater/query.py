"""readlater.query - extraction entry points.

Pure functions: no network, no global state.  Each call builds a fresh
:class:`~readlater.items.ExtractionResult` that the caller owns.

From raw HTML::

    from readlater.query import parse

    result = parse(html, url="https://example.com/blog/post")
    print(result.title, result.metadata.reading_time)

From an already-parsed tree (BeautifulSoup, lxml, or any MarkupNode)::

    from bs4 import BeautifulSoup
    from readlater.query import extract

    soup = BeautifulSoup(html, "lxml")
    result = extract(soup, url="https://example.com/blog/post")

Honouring a user selection::

    result = extract(soup, url=url, selection="the highlighted text")
"""

from __future__ import annotations

import logging
from typing import Any

from readlater.extractors.main_content import (
    count_words,
    locate_content,
    prune_noise,
    reading_time,
    serialize_text,
)
from readlater.extractors.metadata import (
    derive_summary,
    find_meta_tags,
    harvest_metadata,
    truncate,
)
from readlater.items import ArticleMetadata, ExtractionResult, Fidelity, SelectionSpan
from readlater.profiles import ExtractorConfig
from readlater.settings import DEFAULT_PARSER
from readlater.tree import PARSER_BACKENDS, as_node, parse_document

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class ExtractionUnavailable(RuntimeError):
    """Raised when there is no usable document to extract from.

    This is a caller precondition failure (the host could not supply a
    document), never a complaint about the markup itself.

    Attributes:
        url -- the page URL the caller passed, if any
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


def _coerce_selection(selection: SelectionSpan | str | None) -> SelectionSpan | None:
    if selection is None or isinstance(selection, SelectionSpan):
        return selection
    return SelectionSpan(text=selection)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract(
    document: Any,
    *,
    url: str = "",
    selection: SelectionSpan | str | None = None,
    fidelity: Fidelity | str | None = None,
    config: ExtractorConfig | None = None,
) -> ExtractionResult:
    """Extract an article record from a parsed *document*.

    Args:
        document:  Document root: a :class:`~readlater.tree.MarkupNode`, a
                   BeautifulSoup object / ``Tag``, or an ``lxml`` element.
                   It is read but never modified.
        url:       Page URL, copied into the result and used for the domain
                   and canonical URL.
        selection: User-highlighted text.  When non-empty it replaces the
                   content verbatim and the summary (truncated); title, url
                   and metadata still come from the document.
        fidelity:  ``"basic"`` or ``"full"``; defaults to ``config.fidelity``.
        config:    Extraction parameters; defaults to :class:`ExtractorConfig`.

    Raises:
        ExtractionUnavailable: When *document* is None or not a tree.
    """
    if document is None:
        raise ExtractionUnavailable("No document available for extraction", url=url)
    try:
        root = as_node(document)
    except TypeError as exc:
        raise ExtractionUnavailable(str(exc), url=url) from exc

    cfg = config or ExtractorConfig()
    mode = Fidelity(fidelity) if fidelity is not None else cfg.fidelity
    span = _coerce_selection(selection)

    # Locator -> Pruner -> Normalizer
    location = locate_content(root, cfg.content_patterns())
    pruned = prune_noise(location.node, cfg.noise_patterns())
    content = serialize_text(pruned)
    words = count_words(content)
    if not content:
        logger.warning("No text left after pruning for %s", url or "<document>")

    # Metadata harvester (reads the original tree, not the pruned copy)
    metas = find_meta_tags(root)
    meta = harvest_metadata(root, url, metas=metas, extended=mode is Fidelity.FULL)
    summary = derive_summary(
        metas,
        pruned,
        content,
        length=cfg.summary_length,
        ellipsis=cfg.ellipsis,
    )

    metadata = ArticleMetadata(
        author=meta["author"],
        published_time=meta["published_time"],
        site_name=meta["site_name"],
        type=meta["type"],
        image=meta["image"],
        reading_time=reading_time(words, cfg.words_per_minute, cfg.min_reading_minutes),
    )
    if mode is Fidelity.FULL:
        metadata = metadata.model_copy(
            update={
                "word_count": words,
                "domain": meta["domain"],
                "language": meta["language"],
                "canonical_url": meta["canonical_url"],
                "published_at": meta["published_at"],
            },
        )

    # Selection override
    if span is not None and span.text:
        logger.debug("Selection of %d chars overrides content", len(span.text))
        content = span.text
        summary = truncate(span.text, cfg.summary_length, cfg.ellipsis)

    return ExtractionResult(
        title=meta["title"],
        url=url,
        content=content,
        summary=summary,
        tags=meta["tags"],
        metadata=metadata,
    )


def parse(
    html: str | None,
    *,
    url: str = "",
    selection: SelectionSpan | str | None = None,
    fidelity: Fidelity | str | None = None,
    config: ExtractorConfig | None = None,
    parser: str = DEFAULT_PARSER,
) -> ExtractionResult:
    """Parse raw *html* and extract an article record.

    Args:
        parser: Tree backend, see :func:`readlater.tree.parse_document`.

    Raises:
        ExtractionUnavailable: When *html* is missing or blank, or the
                               backend cannot build a tree from it.
        ValueError: On an unknown *parser* name.
    """
    if not isinstance(html, str) or not html.strip():
        raise ExtractionUnavailable("Empty or missing HTML document", url=url)
    if parser not in PARSER_BACKENDS:
        raise ValueError(f"Unknown parser {parser!r}")
    try:
        root = parse_document(html, parser=parser)
    except ValueError as exc:
        raise ExtractionUnavailable(str(exc), url=url) from exc
    return extract(root, url=url, selection=selection, fidelity=fidelity, config=config)
