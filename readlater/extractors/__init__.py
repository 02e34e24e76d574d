"""Extraction sub-package: content location, noise pruning, metadata harvesting."""

from .main_content import (
    ContentLocation,
    count_words,
    locate_content,
    prune_noise,
    reading_time,
    serialize_text,
)
from .metadata import derive_summary, harvest_metadata, meta_content
from .patterns import CONTENT_PATTERNS, NOISE_PATTERNS, NodePattern

__all__ = [
    "CONTENT_PATTERNS",
    "NOISE_PATTERNS",
    "ContentLocation",
    "NodePattern",
    "count_words",
    "derive_summary",
    "harvest_metadata",
    "locate_content",
    "meta_content",
    "prune_noise",
    "reading_time",
    "serialize_text",
]
