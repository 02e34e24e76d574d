"""Main content location, noise pruning and text normalization.

Locator:    ordered content patterns; first pattern with any match wins,
            first match in document order within it.  Falls back to
            ``<body>`` (or the root when there is no body).
Pruner:     deep-copies the located subtree and removes every descendant
            that matches a noise pattern.  The input tree is never touched.
Normalizer: renders the pruned copy to text and derives word count and
            reading time.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import NamedTuple

from readlater.extractors.patterns import CONTENT_PATTERNS, NOISE_PATTERNS, NodePattern
from readlater.settings import MIN_READING_MINUTES, WORDS_PER_MINUTE
from readlater.tree import MarkupNode, find_first, iter_elements

logger = logging.getLogger(__name__)


class ContentLocation(NamedTuple):
    node: MarkupNode
    pattern: NodePattern | None  # None when the locator fell back


# ---------------------------------------------------------------------------
# Locator
# ---------------------------------------------------------------------------

def locate_content(
    root: MarkupNode,
    patterns: Iterable[NodePattern] = CONTENT_PATTERNS,
) -> ContentLocation:
    """Return the subtree most likely to hold the article body."""
    elements = list(iter_elements(root))
    for pattern in patterns:
        for el in elements:
            if pattern.matches(el):
                logger.debug("Content located via %s", pattern)
                return ContentLocation(node=el, pattern=pattern)

    body = find_first(root, "body", include_self=True)
    logger.debug("No content pattern matched; falling back to <%s>", (body or root).tag)
    return ContentLocation(node=body or root, pattern=None)


# ---------------------------------------------------------------------------
# Pruner
# ---------------------------------------------------------------------------

def prune_noise(
    node: MarkupNode,
    patterns: Iterable[NodePattern] = NOISE_PATTERNS,
) -> MarkupNode:
    """Return a deep copy of *node* with every noise descendant removed."""
    noise = tuple(patterns)
    clone = node.clone()

    # Collect outermost matches only: a removed subtree takes its noisy
    # descendants with it.
    doomed: list[MarkupNode] = []
    stack = list(reversed(clone.children()))
    while stack:
        el = stack.pop()
        if any(p.matches(el) for p in noise):
            doomed.append(el)
            continue
        stack.extend(reversed(el.children()))

    for el in doomed:
        el.detach()
    logger.debug("Pruned %d noise subtree(s) from <%s>", len(doomed), clone.tag)
    return clone


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------

def serialize_text(node: MarkupNode) -> str:
    return node.text().strip()


def count_words(text: str) -> int:
    return len(text.split())


def reading_minutes(
    word_count: int,
    wpm: int = WORDS_PER_MINUTE,
    minimum: int = MIN_READING_MINUTES,
) -> int:
    """Return estimated reading time in whole minutes (at least *minimum*)."""
    return max(minimum, math.ceil(word_count / wpm))


def reading_time(
    word_count: int,
    wpm: int = WORDS_PER_MINUTE,
    minimum: int = MIN_READING_MINUTES,
) -> str:
    """Return the reading-time label, e.g. ``"3 min read"``."""
    return f"{reading_minutes(word_count, wpm, minimum)} min read"


def first_paragraph_text(node: MarkupNode) -> str | None:
    """Return the rendered text of the first ``<p>`` under *node*, or None."""
    paragraph = find_first(node, "p")
    if paragraph is None:
        return None
    return paragraph.text().strip()
